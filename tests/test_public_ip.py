"""Tests for public IP discovery."""

from __future__ import annotations

import httpx
import pytest

from cloudflare_ddns.errors import DecodeError, HTTPStatusError, NetworkError
from cloudflare_ddns.public_ip import fetch_public_ip, is_valid_ipv4


def make_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestIsValidIPv4:
    """Tests for is_valid_ipv4 function."""

    @pytest.mark.parametrize("value", ["1.2.3.4", "255.255.255.255", "0.0.0.0"])
    def test_valid(self, value):
        assert is_valid_ipv4(value)

    @pytest.mark.parametrize(
        "value",
        ["", "1.2.3", "256.1.1.1", "::1", "<html>", "1.2.3.4 "],
    )
    def test_invalid(self, value):
        assert not is_valid_ipv4(value)


class TestFetchPublicIP:
    """Tests for fetch_public_ip function."""

    def test_returns_ip(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="5.6.7.8")

        with make_client(handler) as client:
            assert fetch_public_ip(client) == "5.6.7.8"

        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert seen[0].url.host == "api.ipify.org"
        assert seen[0].url.params["format"] == "text"

    def test_strips_whitespace(self):
        with make_client(lambda request: httpx.Response(200, text="5.6.7.8\n")) as client:
            assert fetch_public_ip(client) == "5.6.7.8"

    def test_non_200_status(self):
        with make_client(lambda request: httpx.Response(503, text="busy")) as client:
            with pytest.raises(HTTPStatusError) as exc_info:
                fetch_public_ip(client)
        assert exc_info.value.status_code == 503
        assert "503" in str(exc_info.value)

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            msg = "connection refused"
            raise httpx.ConnectError(msg, request=request)

        with make_client(handler) as client:
            with pytest.raises(NetworkError) as exc_info:
                fetch_public_ip(client)
        assert "connection refused" in str(exc_info.value)

    def test_body_is_not_an_ip(self):
        with make_client(lambda request: httpx.Response(200, text="<html>login</html>")) as client:
            with pytest.raises(DecodeError):
                fetch_public_ip(client)
