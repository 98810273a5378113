# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
Activators turn implementation names into classes or factories.

The registry loader only knows implementation names; an activator is the
single place where a name becomes something constructible.
"""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from wirebox.injection.errors import UnresolvedImplementationError


@runtime_checkable
class Activator(Protocol):
    """Resolve an implementation name to a class or callable."""

    def resolve(self, name: str) -> Any:
        """Return the class or callable named ``name``.

        Raises:
            UnresolvedImplementationError: If nothing constructible has that name
        """
        ...


class ImportActivator:
    """Resolve ``package.module:Attr`` or ``package.module.Attr`` by importing.

    With a colon everything after it is an attribute path, which may be
    nested (``pkg.mod:Outer.Inner``). Without a colon the longest importable
    module prefix is used.
    """

    def resolve(self, name: str) -> Any:
        path = name.strip()
        if not path:
            raise UnresolvedImplementationError(name, "implementation name is empty")

        if ":" in path:
            module_name, _, attr_path = path.partition(":")
            module = self._import(name, module_name)
            target = self._walk(name, module, attr_path.split("."))
        else:
            target = self._resolve_dotted(name, path.split("."))

        if not callable(target):
            raise UnresolvedImplementationError(
                name, f"{type(target).__name__} object is not constructible"
            )
        return target

    def _resolve_dotted(self, name: str, parts: list[str]) -> Any:
        if len(parts) < 2:
            raise UnresolvedImplementationError(
                name, "expected 'module.Attribute' or 'module:Attribute'"
            )
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                module = importlib.import_module(module_name)
            except ModuleNotFoundError as exc:
                # Only swallow misses on the prefix itself, not broken imports inside it
                if exc.name is not None and (
                    module_name == exc.name or module_name.startswith(exc.name + ".")
                ):
                    continue
                raise UnresolvedImplementationError(name, str(exc)) from exc
            return self._walk(name, module, parts[split:])
        raise UnresolvedImplementationError(name, "no importable module prefix")

    def _import(self, name: str, module_name: str) -> Any:
        try:
            return importlib.import_module(module_name)
        except ImportError as exc:
            raise UnresolvedImplementationError(name, str(exc)) from exc

    def _walk(self, name: str, target: Any, attrs: list[str]) -> Any:
        for attr in attrs:
            try:
                target = getattr(target, attr)
            except AttributeError as exc:
                raise UnresolvedImplementationError(
                    name, f"'{attr}' not found"
                ) from exc
        return target


class MappingActivator:
    """Resolve names from an explicit table of classes or factories."""

    def __init__(self, mapping: Mapping[str, Any]) -> None:
        self._mapping = dict(mapping)

    def resolve(self, name: str) -> Any:
        try:
            return self._mapping[name]
        except KeyError:
            raise UnresolvedImplementationError(
                name, "name is not in the activator mapping"
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in self._mapping
