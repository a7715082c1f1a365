"""
Configuration management for Cloudflare DDNS.

This module handles loading and validating configuration from an "app.env"
file and the process environment. Configuration priority (high to low):
1. Environment variables
2. Configuration file ("app.env")
3. Default values (only for optional keys)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cloudflare_ddns.errors import ConfigLoadError
from cloudflare_ddns.logging_config import DATE_FORMAT, LOG_FORMAT

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any, Final

# Configure basic logging for early startup messages.
# This ensures log messages during config loading (before "setup_logging()" is called)
# are visible with proper formatting. "setup_logging()" configures the
# "cloudflare_ddns" logger with full settings later.
logger_basic = logging.getLogger(__name__)
logger_basic.setLevel(logging.DEBUG)
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
logger_basic.addHandler(handler)
logger_basic.propagate = False


CONFIG_FILE_NAME: Final[str] = "app.env"


class Config(BaseModel):
    """
    Application configuration.

    Field aliases are the upper-case keys used in "app.env" and the
    environment.

    Attributes
    ----------
    auth_email : str
        E-mail address of the CloudFlare account.
    auth_method : str
        Either "global" (Global API Key) or "token" (API Token).
    auth_key : str
        The Global API Key or the API Token.
    zone_identifier : str
        CloudFlare Zone ID holding the record.
    record_name : str
        Fully qualified name of the A record to update.
    ttl : int
        Time to live in seconds (1 means automatic).
    proxy : bool
        Whether the record is proxied through CloudFlare.
    sitename : str
        Display name used in log messages.
    verbose : bool
        Whether to dump full API responses.
    log_level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    log_file : Path | None
        Optional path of a log file.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    auth_email: str = Field(alias="AUTH_EMAIL")
    auth_method: str = Field(alias="AUTH_METHOD")
    auth_key: str = Field(alias="AUTH_KEY", repr=False)
    zone_identifier: str = Field(alias="ZONE_IDENTIFIER")
    record_name: str = Field(alias="RECORD_NAME")
    ttl: int = Field(alias="TTL", ge=1, le=86400)
    proxy: bool = Field(default=False, alias="PROXY")
    sitename: str = Field(alias="SITENAME")
    verbose: bool = Field(default=False, alias="VERBOSE")
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        pattern=r"(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_file: Path | None = Field(default=None, alias="LOG_FILE")


CONFIG_KEYS: Final[frozenset[str]] = frozenset(
    field.alias for field in Config.model_fields.values() if field.alias
)


def _format_validation_errors(
    error: ValidationError,
    config_path: Path | None,
) -> str:
    """
    Format Pydantic validation errors into human-readable messages.

    Parameters
    ----------
    error : ValidationError
        Pydantic validation error.
    config_path : Path | None
        Path to the configuration file.

    Returns
    -------
    str
        Single-line error message with one "[FIELD]: ..." entry per problem,
        separated by "; ".
    """
    header = f'Configuration error in "{config_path}":' if config_path else "Configuration error:"
    entries: list[str] = []

    for err in error.errors():
        field_path = ".".join(str(loc) for loc in err["loc"])
        error_type = err["type"]

        if error_type == "missing":
            entries.append(f"[{field_path}]: Required key is missing.")
            continue

        error_input = err["input"]
        input_type = type(error_input).__name__
        value_repr = (
            f'"{error_input}"' if isinstance(error_input, str) else repr(error_input)
        )
        expected_type = _get_expected_type(error_type)
        entries.append(
            f"[{field_path}]: Expected {expected_type}, got {input_type} "
            f"(value: {value_repr}). {err['msg']}.",
        )

    return f"{header} " + "; ".join(entries)


def _get_expected_type(error_type: str) -> str:
    """
    Get human-readable expected type from Pydantic error type.

    Parameters
    ----------
    error_type : str
        Pydantic error type string.

    Returns
    -------
    str
        Human-readable type name.
    """
    type_mapping = {
        "int_type": "int",
        "int_parsing": "int",
        "greater_than_equal": "int >= 1",
        "less_than_equal": "int <= 86400",
        "bool_type": "bool",
        "bool_parsing": "bool",
        "string_type": "str",
        "string_pattern_mismatch": "log level",
    }
    return type_mapping.get(error_type, error_type)


def read_env_file(config_path: Path) -> dict[str, str]:
    """
    Read key/value pairs from an env-style configuration file.

    Parameters
    ----------
    config_path : Path
        Path to the "app.env" file.

    Returns
    -------
    dict[str, str]
        Parsed key/value pairs. Keys without a value are dropped.

    Raises
    ------
    ConfigLoadError
        If the file does not exist or cannot be read.
    """
    if not config_path.is_file():
        msg = f'Configuration file not found: "{config_path}".'
        raise ConfigLoadError(msg, config_path)

    try:
        values = dotenv_values(config_path, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f'Failed to read configuration file "{config_path}": {e}'
        raise ConfigLoadError(msg, config_path) from e

    return {key: value for key, value in values.items() if value is not None}


def overlay_environment(
    values: Mapping[str, str],
    environ: Mapping[str, str],
) -> dict[str, str]:
    """
    Override configuration values with matching environment variables.

    Parameters
    ----------
    values : Mapping[str, str]
        Values read from the configuration file.
    environ : Mapping[str, str]
        The environment to overlay.

    Returns
    -------
    dict[str, str]
        Merged values. Non-empty environment variables take precedence;
        an empty variable leaves the file value in place.
    """
    result = dict(values)
    for key in CONFIG_KEYS:
        if environ.get(key):
            result[key] = environ[key]
    return result


def validate_config_dict(
    data: Mapping[str, Any],
    config_path: Path | None = None,
) -> Config:
    """
    Validate configuration values using Pydantic.

    Parameters
    ----------
    data : Mapping[str, Any]
        Configuration values keyed by their upper-case names.
    config_path : Path | None, optional
        Path to the configuration file (for error messages).

    Returns
    -------
    Config
        The validated configuration.

    Raises
    ------
    ConfigLoadError
        If validation fails.
    """
    try:
        return Config.model_validate(dict(data))
    except ValidationError as e:
        msg = _format_validation_errors(e, config_path)
        raise ConfigLoadError(msg, config_path) from e


def load_config(
    config_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """
    Load configuration from "app.env" and the environment.

    Parameters
    ----------
    config_dir : Path | None, optional
        Directory containing "app.env". Defaults to the working directory.
    environ : Mapping[str, str] | None, optional
        Environment to overlay. Defaults to ``os.environ``.

    Returns
    -------
    Config
        Loaded configuration.

    Raises
    ------
    ConfigLoadError
        If the file is missing or unreadable, or the values are invalid.
    """
    if config_dir is None:
        config_dir = Path()
    if environ is None:
        environ = os.environ

    config_path = config_dir.expanduser() / CONFIG_FILE_NAME
    logger_basic.info('Loading configuration from "%s".', config_path)

    values = overlay_environment(read_env_file(config_path), environ)
    return validate_config_dict(values, config_path)
