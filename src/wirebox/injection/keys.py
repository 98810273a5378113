# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
Service keys.

A service may be requested by type or by name. Both spellings are
normalized here so the rest of the engine only ever compares ``ServiceKey``
values: a type becomes its dotted qualified name, a string is kept as is.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from wirebox.injection.errors import InvalidServiceKeyError


@dataclass(frozen=True, slots=True)
class ServiceKey:
    """Normalized, immutable identity of a registration."""

    name: str
    service_type: type[Any] | None = field(
        default=None, compare=False, hash=False, repr=False
    )

    @classmethod
    def of(cls, value: KeyLike) -> ServiceKey:
        """Build a key from a type, a string name or an existing key."""
        if isinstance(value, ServiceKey):
            return value
        if inspect.isclass(value):
            return cls(qualified_name(value), service_type=value)
        if isinstance(value, str):
            name = value.strip()
            if not name:
                raise InvalidServiceKeyError(value, "service name must not be empty")
            return cls(name)
        raise InvalidServiceKeyError(value, "expected a type or a string name")

    @property
    def short_name(self) -> str:
        """Last dotted segment of the name, for compact messages."""
        return self.name.rsplit(".", 1)[-1]

    def __str__(self) -> str:
        return self.name


KeyLike: TypeAlias = "type[Any] | str | ServiceKey"


def qualified_name(tp: type[Any]) -> str:
    """Dotted ``module.QualName`` of a type; builtins keep their bare name."""
    module = getattr(tp, "__module__", None)
    qualname = getattr(tp, "__qualname__", tp.__name__)
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"
