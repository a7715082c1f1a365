"""Public IP address discovery."""

from __future__ import annotations

import ipaddress
import logging
from typing import TYPE_CHECKING

import httpx
from starlette import status as st_status

from cloudflare_ddns.errors import DecodeError, HTTPStatusError, NetworkError

if TYPE_CHECKING:
    from typing import Final


IPIFY_URL: Final[str] = "https://api.ipify.org"


logger = logging.getLogger(__name__)


def is_valid_ipv4(value: str) -> bool:
    """
    Check whether a string is a dotted-quad IPv4 address.

    Parameters
    ----------
    value : str
        The string to check.

    Returns
    -------
    bool
        True if the string is a valid IPv4 address.
    """
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def fetch_public_ip(client: httpx.Client) -> str:
    """
    Get the current public IPv4 address from ipify.org.

    Parameters
    ----------
    client : httpx.Client
        HTTP client.

    Returns
    -------
    str
        The public IPv4 address.

    Raises
    ------
    NetworkError
        If the request fails.
    HTTPStatusError
        If ipify does not answer with 200.
    DecodeError
        If the body is not an IPv4 address.
    """
    logger.info("Attempting to get our current IP address from ipify.org.")

    try:
        response = client.get(IPIFY_URL, params={"format": "text"})
    except httpx.RequestError as e:
        msg = f"Failed to fetch IP address from ipify: {e}"
        raise NetworkError(msg) from e

    logger.debug("[ipify] GET %s -> %d", IPIFY_URL, response.status_code)

    if response.status_code != st_status.HTTP_200_OK:
        msg = f"Failed to fetch IP address from ipify. Status code: {response.status_code}"
        raise HTTPStatusError(msg, response.status_code)

    current_ip = response.text.strip()
    if not is_valid_ipv4(current_ip):
        msg = f"ipify returned an invalid IPv4 address: {current_ip!r}"
        raise DecodeError(msg)

    logger.info("Our current public IP address: %s", current_ip)
    return current_ip
