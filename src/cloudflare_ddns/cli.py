"""
CLI entry point for Cloudflare DDNS.

This module runs one update cycle and maps its outcome to the process exit
status: 0 when the record is current or was updated, 1 on any failure.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import httpx

from cloudflare_ddns.cloudflare import HTTP_TIMEOUT
from cloudflare_ddns.config import load_config
from cloudflare_ddns.errors import ConfigLoadError, DDNSError
from cloudflare_ddns.logging_config import setup_logging
from cloudflare_ddns.updater import run_update

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


logger = logging.getLogger(__name__)


def run(
    config_dir: Path | None = None,
    client: httpx.Client | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """
    Load configuration and run one update cycle.

    Parameters
    ----------
    config_dir : Path | None, optional
        Directory containing "app.env". Defaults to the working directory.
    client : httpx.Client | None, optional
        HTTP client to use. A new client is created and closed if omitted.
    environ : Mapping[str, str] | None, optional
        Environment overlay. Defaults to ``os.environ``.

    Returns
    -------
    int
        Process exit status.
    """
    try:
        config = load_config(config_dir, environ)
    except ConfigLoadError as e:
        print(f"cannot load config: {e}", file=sys.stderr)  # noqa: T201
        return 1

    level = config.log_level
    # Verbose dumps are logged at INFO and must not be filtered out.
    if config.verbose and getattr(logging, level.upper()) > logging.INFO:
        level = "INFO"

    try:
        setup_logging(level, config.log_file)
    except ConfigLoadError as e:
        print(e, file=sys.stderr)  # noqa: T201
        return 1

    try:
        if client is None:
            with httpx.Client(timeout=HTTP_TIMEOUT) as owned_client:
                result = run_update(config, owned_client)
        else:
            result = run_update(config, client)
    except DDNSError as e:
        logger.critical("%s", e)
        return 1

    logger.info("%s", result.message)
    return 0


def main() -> None:
    """Run the updater and exit with its status."""
    sys.exit(run())


if __name__ == "__main__":
    main()
