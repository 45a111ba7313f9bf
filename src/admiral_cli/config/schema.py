"""Configuration models for the CLI configuration file."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderConfig(BaseSettings):
    """Control plane connection settings.

    Fields can be set via YAML (constructor kwargs) or environment variables
    with the ``ADMIRAL_`` prefix.  Constructor kwargs take precedence.

    ``token`` is typically provided via the ``ADMIRAL_TOKEN`` environment
    variable rather than YAML to avoid committing secrets to version control.
    """

    model_config = SettingsConfigDict(env_prefix="ADMIRAL_")

    url: str | None = None
    token: str | None = None
    verify_ssl: bool = True
    timeout: float | None = None


class Config(BaseModel):
    """CLI configuration file contents."""

    provider: ProviderConfig
