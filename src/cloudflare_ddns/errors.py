"""
Exceptions for Cloudflare DDNS.

Every failure in an update cycle is terminal. Helpers raise one of the
exceptions below and the CLI entry point maps them to a non-zero exit status.

Exception hierarchy::

    DDNSError
    ├─ ConfigLoadError             - app.env missing, unreadable or invalid
    ├─ NetworkError                - transport-level failure
    ├─ HTTPStatusError             - unexpected HTTP status
    ├─ DecodeError                 - malformed response body
    └─ ValidationError             - semantic failures
       ├─ UnsupportedAuthMethodError
       ├─ RecordNotFoundError
       └─ UpdateFailedError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class DDNSError(Exception):
    """Base exception for all Cloudflare DDNS errors."""


class ConfigLoadError(DDNSError):
    """
    Exception raised when the configuration cannot be loaded.

    Attributes
    ----------
    config_path : Path | None
        Path to the configuration file that failed to load.
    """

    def __init__(self, message: str, config_path: Path | None = None) -> None:
        """
        Initialize ConfigLoadError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        config_path : Path | None, optional
            Path to the configuration file.
        """
        self.config_path = config_path
        super().__init__(message)


class NetworkError(DDNSError):
    """A request could not be sent or its response could not be read."""


class HTTPStatusError(DDNSError):
    """
    A request completed with an unexpected HTTP status.

    Attributes
    ----------
    status_code : int
        The HTTP status code returned by the server.
    """

    def __init__(self, message: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(message)


class DecodeError(DDNSError):
    """A response body could not be decoded."""


class ValidationError(DDNSError):
    """The data is well-formed but cannot be acted upon."""


class UnsupportedAuthMethodError(ValidationError):
    """The configured AUTH_METHOD is neither "global" nor "token"."""


class RecordNotFoundError(ValidationError):
    """No A record matching RECORD_NAME exists in the zone."""


class UpdateFailedError(ValidationError):
    """
    CloudFlare reported that the record update did not succeed.

    Attributes
    ----------
    record_id : str
        Identifier of the record that failed to update.
    record_name : str
        Name of the record that failed to update.
    """

    def __init__(self, message: str, record_id: str, record_name: str) -> None:
        self.record_id = record_id
        self.record_name = record_name
        super().__init__(message)
