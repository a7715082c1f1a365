"""
Logging configuration for Cloudflare DDNS.

This module provides logging setup with support for console and file output.
CloudFlare credentials are automatically masked in log messages.
"""

from __future__ import annotations

import logging
import logging.handlers
import re
from typing import TYPE_CHECKING

from cloudflare_ddns.errors import ConfigLoadError

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Final


# Pattern to match sensitive tokens/keys in log messages
# Each tuple is (pattern, replacement)
# For partial masking, capture the prefix to keep and mask the rest
SENSITIVE_PATTERNS: Final[list[tuple[re.Pattern[str], str]]] = [
    # Authorization header (API Token)
    # Keep first 6 characters, mask the rest
    (
        re.compile(
            r"((?:Authorization:\s*)?Bearer\s+)(.{0,6})([^\s\"']*)", re.IGNORECASE,
        ),
        r"\1\2******",
    ),
    # X-Auth-Key header (Global API Key), as "X-Auth-Key: ..." or "'X-Auth-Key': '...'"
    (
        re.compile(r"(X-Auth-Key['\"]?:\s*['\"]?)([^\s\"',]{0,6})([^\s\"',]*)", re.IGNORECASE),
        r"\1\2******",
    ),
    # AUTH_KEY=... as found in app.env dumps
    (
        re.compile(r"(AUTH_KEY=['\"]?)([^\s\"',]{0,6})([^\s\"',]*)"),
        r"\1\2******",
    ),
]


# Constants
LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER: Final[str] = "cloudflare_ddns"


class SensitiveFilter(logging.Filter):
    """
    A logging filter that masks sensitive information.

    This filter replaces API keys and tokens with asterisks
    to prevent credential leakage in log files.
    """

    @staticmethod
    def _mask_sensitive(value: str) -> str:
        """
        Apply all sensitive patterns to mask a string.

        Parameters
        ----------
        value : str
            The string to process.

        Returns
        -------
        str
            The string with sensitive data masked.
        """
        result = value
        for pattern, replacement in SENSITIVE_PATTERNS:
            result = pattern.sub(replacement, result)
        return result

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Filter and modify log record to mask sensitive data.

        Parameters
        ----------
        record : logging.LogRecord
            The log record to process.

        Returns
        -------
        bool
            Always returns True (record is always logged).
        """
        if record.msg:
            record.msg = self._mask_sensitive(str(record.msg))

        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    k: self._mask_sensitive(v) if isinstance(v, str) else v
                    for k, v in record.args.items()
                }
            elif isinstance(record.args, tuple):
                record.args = tuple(
                    self._mask_sensitive(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )

        return True


def configure_handler(handler: logging.Handler) -> None:
    """
    Configure a logging handler with formatter and sensitive filter.

    Parameters
    ----------
    handler : logging.Handler
        The handler to configure.
    """
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(SensitiveFilter())


def setup_logging(level: str = "INFO", file_path: Path | None = None) -> logging.Logger:
    """
    Set up the package logger.

    Parameters
    ----------
    level : str, optional
        Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    file_path : Path | None, optional
        Also write log records to this file when given.

    Returns
    -------
    logging.Logger
        The configured package logger.

    Raises
    ------
    ConfigLoadError
        If the log file cannot be opened.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear any existing handlers
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    console_handler = logging.StreamHandler()
    configure_handler(console_handler)
    logger.addHandler(console_handler)

    if file_path is not None:
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.WatchedFileHandler(
                str(file_path),
                encoding="utf-8",
                delay=False,
            )
        except OSError as e:
            msg = f'Failed to enable file logging at "{file_path}": {e}'
            raise ConfigLoadError(msg) from e
        configure_handler(file_handler)
        logger.addHandler(file_handler)
        logger.debug('File logging enabled: "%s".', file_path)

    # Prevent propagation to root logger
    logger.propagate = False
    return logger
