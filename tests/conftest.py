"""Shared fixtures for Cloudflare DDNS tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from cloudflare_ddns.config import Config
from tests.helpers import BASE_CONFIG

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def make_config() -> Callable[..., Config]:
    """Return a factory building a Config with overrides."""

    def _make_config(**overrides: Any) -> Config:
        return Config.model_validate({**BASE_CONFIG, **overrides})

    return _make_config


@pytest.fixture
def config(make_config: Callable[..., Config]) -> Config:
    """A token-authenticated configuration."""
    return make_config()


@pytest.fixture
def write_env_file(tmp_path):
    """Return a helper writing an app.env file into a temporary directory."""

    def _write(values: dict[str, Any]) -> Any:
        lines = [f"{key}={value}" for key, value in values.items()]
        (tmp_path / "app.env").write_text("\n".join(lines) + "\n", encoding="utf-8")
        return tmp_path

    return _write
