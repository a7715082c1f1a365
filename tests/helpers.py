"""Test helpers: canned CloudFlare payloads and a fake HTTP backend."""

from __future__ import annotations

import json
from typing import Any

import httpx

BASE_CONFIG: dict[str, Any] = {
    "AUTH_EMAIL": "admin@example.com",
    "AUTH_METHOD": "token",
    "AUTH_KEY": "cf-secret-key-123456",
    "ZONE_IDENTIFIER": "zone123",
    "RECORD_NAME": "home.example.com",
    "TTL": "120",
    "PROXY": "false",
    "SITENAME": "home",
    "VERBOSE": "false",
}


def make_record(record_id: str = "abc", content: str = "1.1.1.1") -> dict[str, Any]:
    """Build a CloudFlare DNS record as returned by the API."""
    return {
        "id": record_id,
        "zone_id": "zone123",
        "zone_name": "example.com",
        "name": "home.example.com",
        "type": "A",
        "content": content,
        "proxiable": True,
        "proxied": False,
        "ttl": 120,
        "locked": False,
        "meta": {
            "auto_added": False,
            "managed_by_apps": False,
            "managed_by_argo_tunnel": False,
            "source": "primary",
        },
    }


def list_envelope(records: list[dict[str, Any]], count: int | None = None) -> dict[str, Any]:
    """Build a CloudFlare list response envelope."""
    return {
        "result": records,
        "success": True,
        "errors": [],
        "messages": [],
        "result_info": {
            "page": 1,
            "per_page": 100,
            "count": len(records) if count is None else count,
            "total_count": len(records) if count is None else count,
            "total_pages": 1,
        },
    }


def update_envelope(record: dict[str, Any] | None, *, success: bool = True) -> dict[str, Any]:
    """Build a CloudFlare single-record response envelope."""
    return {
        "result": record,
        "success": success,
        "errors": [] if success else [{"code": 9999, "message": "Record update rejected"}],
        "messages": [],
    }


class FakeAPI:
    """
    Fake ipify and CloudFlare endpoints backed by ``httpx.MockTransport``.

    Attributes
    ----------
    requests : list[httpx.Request]
        Every request received, in order.
    """

    def __init__(
        self,
        *,
        public_ip: str = "1.1.1.1",
        ip_status: int = 200,
        records: list[dict[str, Any]] | None = None,
        count: int | None = None,
        list_status: int = 200,
        list_body: bytes | None = None,
        update_success: bool = True,
        update_status: int = 200,
        update_body: bytes | None = None,
    ) -> None:
        self.public_ip = public_ip
        self.ip_status = ip_status
        self.records = [make_record()] if records is None else records
        self.count = count
        self.list_status = list_status
        self.list_body = list_body
        self.update_success = update_success
        self.update_status = update_status
        self.update_body = update_body
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        """Route a request to the matching fake endpoint."""
        self.requests.append(request)

        if request.url.host == "api.ipify.org":
            return httpx.Response(self.ip_status, text=self.public_ip)

        if request.method == "GET":
            if self.list_body is not None:
                return httpx.Response(self.list_status, content=self.list_body)
            return httpx.Response(
                self.list_status,
                json=list_envelope(self.records, self.count),
            )

        if request.method == "PATCH":
            if self.update_body is not None:
                return httpx.Response(self.update_status, content=self.update_body)
            sent = json.loads(request.content)
            record_id = request.url.path.rsplit("/", 1)[-1]
            record = make_record(record_id, sent["content"]) if self.update_success else None
            return httpx.Response(
                self.update_status,
                json=update_envelope(record, success=self.update_success),
            )

        return httpx.Response(404)

    def transport(self) -> httpx.MockTransport:
        """Create a mock transport routed to this fake."""
        return httpx.MockTransport(self.handler)

    def client(self) -> httpx.Client:
        """Create an HTTP client wired to this fake; close it after use."""
        return httpx.Client(transport=self.transport())

    @property
    def cloudflare_requests(self) -> list[httpx.Request]:
        """Requests sent to the CloudFlare API."""
        return [r for r in self.requests if r.url.host == "api.cloudflare.com"]

    @property
    def patch_requests(self) -> list[httpx.Request]:
        """PATCH requests sent to the CloudFlare API."""
        return [r for r in self.cloudflare_requests if r.method == "PATCH"]
