# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
Service lifetimes.

Singleton and Scoped are both cached once per provider. Providers have no
parent/child relationship, so the two behave identically; the distinction is
kept because registrations and registry records declare it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from wirebox.injection.errors import InvalidLifetimeError


class ServiceLifetime(str, Enum):
    """Enum representing the supported service lifetimes."""

    SINGLETON = "singleton"
    """Created once and reused by the owning provider."""

    SCOPED = "scoped"
    """Created once per provider."""

    TRANSIENT = "transient"
    """Created each time it's requested."""

    @property
    def is_cached(self) -> bool:
        return self is not ServiceLifetime.TRANSIENT

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: Any) -> ServiceLifetime:
        """Parse an enum member or a case-insensitive lifetime name.

        Raises:
            InvalidLifetimeError: If the value names no lifetime
        """
        if isinstance(value, ServiceLifetime):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidLifetimeError(value)
