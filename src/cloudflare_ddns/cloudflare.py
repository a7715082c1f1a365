"""
CloudFlare DNS API client.

This module implements the two CloudFlare API v4 calls needed to keep an A
record current: listing the record and patching its content. Both the
Global API Key and the API Token authentication schemes are supported.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

import httpx
import pydantic

from cloudflare_ddns.errors import DecodeError, HTTPStatusError, NetworkError
from cloudflare_ddns.models import (
    ListResponse,
    RecordType,
    UpdatePayload,
    UpdateResponse,
)

if TYPE_CHECKING:
    from typing import Final

    from cloudflare_ddns.config import Config
    from cloudflare_ddns.models import AuthScheme


# CloudFlare API base URL
CF_API_BASE: Final[str] = "https://api.cloudflare.com/client/v4"

# HTTP timeout in seconds
HTTP_TIMEOUT: Final[float] = 30.0


logger = logging.getLogger(__name__)

EnvelopeT = TypeVar("EnvelopeT", ListResponse, UpdateResponse)


class CloudFlareClient:
    """
    CloudFlare DNS API client bound to one zone and record.

    Parameters
    ----------
    config : Config
        Application configuration.
    auth_scheme : AuthScheme
        Authentication scheme used for every request.
    client : httpx.Client
        HTTP client.
    """

    def __init__(
        self,
        config: Config,
        auth_scheme: AuthScheme,
        client: httpx.Client,
    ) -> None:
        self.config = config
        self.auth_scheme = auth_scheme
        self.client = client

    @property
    def headers(self) -> dict[str, str]:
        """Request headers, including authentication."""
        return {
            "X-Auth-Email": self.config.auth_email,
            "Content-Type": "application/json",
            **self.auth_scheme.header(self.config.auth_key),
        }

    @property
    def records_url(self) -> str:
        """URL of the zone's DNS record collection."""
        return f"{CF_API_BASE}/zones/{self.config.zone_identifier}/dns_records"

    def record_url(self, record_id: str) -> str:
        """URL of a single DNS record."""
        return f"{self.records_url}/{record_id}"

    def list_a_records(self) -> ListResponse:
        """
        Get the A records matching the configured record name.

        Returns
        -------
        ListResponse
            The decoded response envelope.

        Raises
        ------
        NetworkError
            If the request fails.
        HTTPStatusError
            If CloudFlare answers with an error status.
        DecodeError
            If the body is not a CloudFlare envelope.
        """
        params = {"type": RecordType.A.value, "name": self.config.record_name}

        try:
            response = self.client.get(self.records_url, headers=self.headers, params=params)
        except httpx.RequestError as e:
            msg = f"Failed to fetch records from CloudFlare: {e}"
            raise NetworkError(msg) from e

        logger.debug(
            "[cloudflare] GET %s?type=%s&name=%s -> %d",
            self.records_url,
            RecordType.A,
            self.config.record_name,
            response.status_code,
        )
        logger.debug("[cloudflare] Response: %s", response.text)

        if response.is_error:
            try:
                detail = ListResponse.model_validate_json(response.content).error_summary()
            except pydantic.ValidationError:
                detail = response.text
            msg = (
                f"Failed to fetch records from CloudFlare. "
                f"Status code: {response.status_code}: {detail}"
            )
            raise HTTPStatusError(msg, response.status_code)

        return self._decode(ListResponse, response)

    def update_record(self, record_id: str, content: str) -> UpdateResponse:
        """
        Set the content of an existing A record.

        Parameters
        ----------
        record_id : str
            Identifier of the record to update.
        content : str
            The new IPv4 address.

        Returns
        -------
        UpdateResponse
            The decoded response envelope. Error statuses are not raised;
            the caller checks ``success``.

        Raises
        ------
        NetworkError
            If the request fails.
        DecodeError
            If the body is not a CloudFlare envelope.
        """
        url = self.record_url(record_id)
        payload = UpdatePayload(
            name=self.config.record_name,
            content=content,
            ttl=self.config.ttl,
            proxied=self.config.proxy,
        )

        try:
            response = self.client.patch(
                url,
                headers=self.headers,
                json=payload.model_dump(mode="json"),
            )
        except httpx.RequestError as e:
            msg = f"Failed to update records in CloudFlare: {e}"
            raise NetworkError(msg) from e

        logger.debug("[cloudflare] PATCH %s -> %d", url, response.status_code)
        logger.debug("[cloudflare] Response: %s", response.text)

        return self._decode(UpdateResponse, response)

    @staticmethod
    def _decode(model: type[EnvelopeT], response: httpx.Response) -> EnvelopeT:
        """
        Decode a response body into an envelope model.

        Raises
        ------
        DecodeError
            If the body is not valid JSON or does not match the model.
        """
        try:
            return model.model_validate_json(response.content)
        except pydantic.ValidationError as e:
            msg = f"Failed to decode CloudFlare response as {model.__name__}: {e}"
            raise DecodeError(msg) from e
