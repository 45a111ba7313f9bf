"""Configuration loading and provider construction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import SecretStr

from admiral_cli.config.loader import ConfigError, load_config
from admiral_cli.config.schema import Config, ProviderConfig
from admiral_cli.core.provider import AdmiralProvider, TokenAuth

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "Config",
    "ConfigError",
    "ProviderConfig",
    "load",
    "load_config",
    "provider_from_config",
]


def load(path: Path | str | None = None) -> Config:
    """Load the CLI configuration file."""
    return load_config(path)


def provider_from_config(config: Config) -> AdmiralProvider:
    """Build an ``AdmiralProvider`` from a ``Config`` instance."""
    if not config.provider.url:
        raise ConfigError("provider.url is required (set in YAML or ADMIRAL_URL env var)")
    auth = None
    if config.provider.token:
        auth = TokenAuth(token=SecretStr(config.provider.token))
    return AdmiralProvider(
        url=config.provider.url,
        auth=auth,
        verify_ssl=config.provider.verify_ssl,
        timeout=config.provider.timeout,
    )
