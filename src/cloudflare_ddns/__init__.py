"""
Cloudflare DDNS - A dynamic DNS updater for Cloudflare-hosted A records.

This package discovers the current public IPv4 address and updates an
existing CloudFlare DNS "A" record when its content differs.
"""

__version__ = "0.1.0"
__author__ = "Cloudflare DDNS Contributors"
