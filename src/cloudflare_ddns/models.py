"""
Data models for Cloudflare DDNS.

This module defines the CloudFlare API v4 envelopes and DNS record
structures, the update payload, and the supported authentication schemes.
Records are read-only snapshots of the provider's state.
"""

from __future__ import annotations

from enum import Enum, StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cloudflare_ddns.errors import UnsupportedAuthMethodError


class RecordType(StrEnum):
    """
    Supported DNS record types.

    Attributes
    ----------
    A : str
        IPv4 address record.
    """

    A = "A"


class AuthScheme(Enum):
    """
    CloudFlare API authentication schemes.

    Each member carries the header name and the prefix put in front of the
    configured key.

    Attributes
    ----------
    GLOBAL_KEY : tuple[str, str]
        Global API Key, sent raw in "X-Auth-Key".
    BEARER_TOKEN : tuple[str, str]
        API Token, sent as "Authorization: Bearer <token>".
    """

    GLOBAL_KEY = ("X-Auth-Key", "")
    BEARER_TOKEN = ("Authorization", "Bearer ")

    def __init__(self, header_name: str, prefix: str) -> None:
        self.header_name = header_name
        self.prefix = prefix

    @classmethod
    def from_method(cls, method: str) -> AuthScheme:
        """
        Map a configured AUTH_METHOD to an authentication scheme.

        Parameters
        ----------
        method : str
            Either "global" or "token".

        Returns
        -------
        AuthScheme
            The matching scheme.

        Raises
        ------
        UnsupportedAuthMethodError
            If the method is not supported.
        """
        match method:
            case "global":
                return cls.GLOBAL_KEY
            case "token":
                return cls.BEARER_TOKEN
            case _:
                msg = f'Failed to set auth header. Unsupported auth method: "{method}".'
                raise UnsupportedAuthMethodError(msg)

    def header(self, key: str) -> dict[str, str]:
        """Build the authentication header for the given key."""
        return {self.header_name: f"{self.prefix}{key}"}


class RecordMeta(BaseModel):
    """Metadata CloudFlare attaches to a DNS record."""

    auto_added: bool = False
    managed_by_apps: bool = False
    managed_by_argo_tunnel: bool = False
    source: str = ""


class DNSRecord(BaseModel):
    """
    A DNS record as returned by CloudFlare.

    Attributes
    ----------
    id : str
        Record identifier.
    zone_id : str
        Identifier of the zone holding the record.
    zone_name : str
        Name of the zone.
    name : str
        Fully qualified record name.
    type : str
        Record type.
    content : str
        Record content (the IP address for A records).
    proxiable : bool
        Whether the record can be proxied.
    proxied : bool
        Whether the record is proxied.
    ttl : int
        Time to live in seconds.
    locked : bool
        Whether the record is locked.
    meta : RecordMeta
        Provider metadata.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    zone_id: str = ""
    zone_name: str = ""
    name: str = ""
    type: str = ""
    content: str = ""
    proxiable: bool = False
    proxied: bool = False
    ttl: int = 0
    locked: bool = False
    meta: RecordMeta = Field(default_factory=RecordMeta)


class ResultInfo(BaseModel):
    """Pagination metadata of a CloudFlare response."""

    page: int = 0
    per_page: int = 0
    count: int = 0
    total_count: int = 0
    total_pages: int = 0


class _Envelope(BaseModel):
    """Fields shared by every CloudFlare API response."""

    success: bool = False
    errors: list[Any] = Field(default_factory=list)
    messages: list[Any] = Field(default_factory=list)
    result_info: ResultInfo = Field(default_factory=ResultInfo)

    @field_validator("errors", "messages", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        """
        Treat a JSON null error or message list as empty.

        Parameters
        ----------
        value : Any
            Raw "errors" or "messages" value from the response.

        Returns
        -------
        Any
            An empty list for None, otherwise the value unchanged.
        """
        return [] if value is None else value

    @field_validator("result_info", mode="before")
    @classmethod
    def null_as_default(cls, value: Any) -> Any:
        """
        Treat a JSON null "result_info" as an all-zero ResultInfo.

        Parameters
        ----------
        value : Any
            Raw "result_info" value from the response.

        Returns
        -------
        Any
            An empty mapping for None, otherwise the value unchanged.
        """
        return {} if value is None else value

    def error_summary(self) -> str:
        """
        Join the error messages reported by CloudFlare.

        Returns
        -------
        str
            Error messages separated by "; ", or "Unknown error".
        """
        parts: list[str] = []
        for err in self.errors:
            if isinstance(err, dict):
                code = err.get("code")
                message = err.get("message", "Unknown error")
                parts.append(f"{message} (code {code})" if code is not None else message)
            else:
                parts.append(str(err))
        return "; ".join(parts) or "Unknown error"


class ListResponse(_Envelope):
    """Response envelope wrapping a list of DNS records."""

    result: list[DNSRecord] = Field(default_factory=list)

    @field_validator("result", mode="before")
    @classmethod
    def null_result_as_empty(cls, value: Any) -> Any:
        """
        Treat a JSON null "result" as an empty record list.

        Parameters
        ----------
        value : Any
            Raw "result" value from the response.

        Returns
        -------
        Any
            An empty list for None, otherwise the value unchanged.
        """
        return [] if value is None else value


class UpdateResponse(_Envelope):
    """Response envelope wrapping a single DNS record."""

    result: DNSRecord | None = None


class UpdatePayload(BaseModel):
    """
    JSON body of a record PATCH request.

    Attributes
    ----------
    type : RecordType
        The record type.
    name : str
        The record name.
    content : str
        The new record content.
    ttl : int
        Time to live in seconds.
    proxied : bool
        Whether the record is proxied.
    """

    type: RecordType = RecordType.A
    name: str
    content: str
    ttl: int
    proxied: bool = False
