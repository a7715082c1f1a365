"""Allow running Cloudflare DDNS with ``python -m cloudflare_ddns``."""

from cloudflare_ddns.cli import main

if __name__ == "__main__":
    main()
