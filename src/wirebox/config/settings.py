# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""Configuration settings loading and caching.

Settings come from ``WIREBOX_*`` environment variables, a ``.env`` file in
the working directory and an environment-specific file such as
``.env.production``.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wirebox.config.environment import Environment
from wirebox.config.errors import ConfigError

_SETTINGS_CACHE: dict[type, Any] = {}
_SETTINGS_LOCK = threading.Lock()


class WireboxSettings(BaseSettings):
    """Process-level settings for the container engine."""

    model_config = SettingsConfigDict(
        env_prefix="WIREBOX_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    env: Environment = Field(
        default=Environment.DEVELOPMENT, description="Deployment environment"
    )
    registry_path: Path | None = Field(
        default=None,
        description="JSON or YAML registry file loaded into the global services",
    )
    validate_implementations: bool = Field(
        default=True,
        description="Check that direct implementations subclass their service type",
    )

    @field_validator("env", mode="before")
    @classmethod
    def parse_env(cls, v: Any) -> Environment:
        if isinstance(v, Environment):
            return v
        try:
            return Environment.from_string(v)
        except ConfigError as exc:
            raise ValueError(exc.message) from exc


def env_files(environment: Environment) -> tuple[str, ...]:
    """Dotenv files read for an environment; later files win."""
    return (".env", f".env.{environment.value}")


def load_settings(settings_class: type[BaseSettings] = WireboxSettings, **overrides: Any) -> Any:
    """Load configuration settings for the specified class.

    The current environment (``WIREBOX_ENV``, ``ENVIRONMENT`` or ``ENV``)
    selects an extra dotenv file, e.g. ``.env.production``, read after
    ``.env``.

    Args:
        settings_class: The settings class to load
        **overrides: Values taking precedence over the environment

    Raises:
        ConfigError: If the environment holds invalid values
    """
    environment = Environment.get_current()
    if "env" in settings_class.model_fields:
        overrides.setdefault("env", environment)
    try:
        return settings_class(_env_file=env_files(environment), **overrides)
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid {settings_class.__name__}: {exc.error_count()} validation error(s)",
            settings_class=settings_class.__name__,
            errors=exc.errors(include_url=False),
        ) from exc


def get_settings() -> WireboxSettings:
    """Get the process-wide settings (loaded once and cached)."""
    settings = _SETTINGS_CACHE.get(WireboxSettings)
    if settings is not None:
        return settings

    with _SETTINGS_LOCK:
        settings = _SETTINGS_CACHE.get(WireboxSettings)
        if settings is None:
            settings = load_settings(WireboxSettings)
            _SETTINGS_CACHE[WireboxSettings] = settings
        return settings


def clear_settings_cache() -> None:
    """Clear the settings cache.

    This function is primarily used for testing and should not normally
    be needed in application code.
    """
    with _SETTINGS_LOCK:
        _SETTINGS_CACHE.clear()
