"""YAML configuration file loader."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor

from admiral_cli.config.schema import Config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.admiral-cli/admiral-cli.yaml")


class ConfigError(Exception):
    """Raised for configuration loading / validation errors."""


# Field name → environment variable.
_PROVIDER_ENV_MAP: dict[str, str] = {
    "url": "ADMIRAL_URL",
    "token": "ADMIRAL_TOKEN",
    "verify_ssl": "ADMIRAL_VERIFY_SSL",
    "timeout": "ADMIRAL_TIMEOUT",
}

_PROVIDER_BOOL_FIELDS: frozenset[str] = frozenset({"verify_ssl"})


def _resolve_provider(raw_provider: dict[str, Any], config_dir: Path) -> dict[str, Any]:
    """Resolve provider fields from YAML, env vars, and ``.env`` file.

    Priority (highest wins): YAML value > env var > ``.env`` file.
    """
    env_file = config_dir / ".env"
    dotenv_vals = dotenv_values(env_file, encoding="utf-8-sig") if env_file.is_file() else {}

    resolved: dict[str, Any] = {}
    for field, env_key in _PROVIDER_ENV_MAP.items():
        val = raw_provider.get(field)
        if val is None:
            val = os.environ.get(env_key)
        if val is None:
            val = dotenv_vals.get(env_key)
        if val is not None:
            if field in _PROVIDER_BOOL_FIELDS and isinstance(val, str):
                if val.lower() not in SafeConstructor.bool_values:
                    raise ConfigError(f"Invalid boolean for {env_key}: {val!r}")
                val = SafeConstructor.bool_values[val.lower()]
            resolved[field] = val

    return resolved


def load_config(path: Path | str | None = None) -> Config:
    """Load the CLI configuration and return a ``Config`` object.

    The file is optional: when *path* is None and the default file does not
    exist, settings come from the environment and ``.env`` only.

    Raises:
        ConfigError: On YAML parse errors or validation failures.
    """
    explicit = path is not None
    path = Path(path) if explicit else DEFAULT_CONFIG_PATH.expanduser()

    raw: Any = {}
    if explicit or path.is_file():
        try:
            raw = YAML(typ="safe").load(path) or {}
        except Exception as exc:
            raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Failed to read {path}: expected a mapping at top level")

    raw_provider = raw.get("provider") or {}
    if not isinstance(raw_provider, dict):
        raise ConfigError(f"Failed to read {path}: 'provider' must be a mapping")

    try:
        raw["provider"] = _resolve_provider(raw_provider, path.parent)
        config = Config.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

    logger.info("Loaded config from %s", path)
    return config
