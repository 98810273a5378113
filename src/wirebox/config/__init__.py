# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""Configuration management for wirebox."""

from wirebox.config.environment import Environment
from wirebox.config.errors import ConfigError
from wirebox.config.settings import (
    WireboxSettings,
    clear_settings_cache,
    get_settings,
    load_settings,
)

__all__ = [
    "ConfigError",
    "Environment",
    "WireboxSettings",
    "clear_settings_cache",
    "get_settings",
    "load_settings",
]
