# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
Service collection for wirebox.

The collection is the append-only registration store of one provider. A key
may be registered once: a second ``add`` for the same key fails whatever its
lifetime or implementation, and the collection is left as it was.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from wirebox.config import get_settings
from wirebox.injection.errors import DuplicateRegistrationError, InvalidServiceKeyError
from wirebox.injection.keys import KeyLike, ServiceKey
from wirebox.injection.lifetime import ServiceLifetime
from wirebox.injection.registration import (
    Registration,
    check_conformance,
    strategy_for,
)
from wirebox.injection.registry import RegistryLoader, RegistryRecord, RegistrySource
from wirebox.logging import get_logger

if TYPE_CHECKING:
    from wirebox.injection.activator import Activator

logger = get_logger(__name__)

LOCAL_LABEL = "services"
GLOBAL_LABEL = "global services"


class ServiceCollection:
    """Ordered, append-only store of registrations.

    Example:
        ```python
        services = ServiceCollection()
        services.add_singleton(Clock, SystemClock).add_transient(ReportBuilder)
        ```
    """

    def __init__(
        self,
        *,
        label: str = LOCAL_LABEL,
        validate_implementations: bool | None = None,
    ) -> None:
        """
        Args:
            label: Name used in error messages ("services" or "global services")
            validate_implementations: Check direct implementations against their
                service type; defaults to the ``validate_implementations`` setting
        """
        if validate_implementations is None:
            validate_implementations = get_settings().validate_implementations
        self._label = label
        self._validate = validate_implementations
        self._registrations: list[Registration] = []
        self._index: dict[ServiceKey, Registration] = {}
        self._lock = threading.Lock()

    @property
    def label(self) -> str:
        return self._label

    def add(
        self,
        key: KeyLike,
        lifetime: ServiceLifetime | str,
        implementation: Any,
    ) -> Registration:
        """Register ``implementation`` for ``key``.

        Args:
            key: Service type, service name or ``ServiceKey``
            lifetime: ``ServiceLifetime`` or its name
            implementation: Class, ``ServiceFactory``, callable or strategy

        Returns:
            The new registration

        Raises:
            DuplicateRegistrationError: If the key is already registered
            InvalidServiceKeyError: If the key cannot be normalized
            InvalidLifetimeError: If the lifetime is unknown
            TypeMismatchError: If a direct implementation does not extend the key type
        """
        service_key = ServiceKey.of(key)
        service_lifetime = ServiceLifetime.parse(lifetime)
        strategy = strategy_for(implementation)
        if self._validate:
            check_conformance(service_key, strategy)

        registration = Registration(service_key, service_lifetime, strategy)
        with self._lock:
            existing = self._index.get(service_key)
            if existing is None:
                self._registrations.append(registration)
                self._index[service_key] = registration

        if existing is not None:
            logger.warning(
                "Rejected duplicate registration",
                service_key=service_key.name,
                lifetime=service_lifetime.display_name,
                collection=self._label,
            )
            raise DuplicateRegistrationError(
                service_key.name,
                service_lifetime.display_name,
                existing.lifetime.display_name,
                self._label,
            )

        logger.debug(
            "Registered service",
            service_key=service_key.name,
            lifetime=service_lifetime.display_name,
            implementation=registration.implementation_name,
        )
        return registration

    def _add_fluent(
        self, lifetime: ServiceLifetime, service: KeyLike, implementation: Any
    ) -> ServiceCollection:
        if implementation is None:
            if isinstance(service, str | ServiceKey):
                raise TypeError(
                    f"An implementation is required when registering by name ({service!s})"
                )
            implementation = service
        self.add(service, lifetime, implementation)
        return self

    def add_singleton(self, service: KeyLike, implementation: Any = None) -> ServiceCollection:
        """Register a singleton; a lone class registers itself."""
        return self._add_fluent(ServiceLifetime.SINGLETON, service, implementation)

    def add_scoped(self, service: KeyLike, implementation: Any = None) -> ServiceCollection:
        """Register a scoped service; a lone class registers itself."""
        return self._add_fluent(ServiceLifetime.SCOPED, service, implementation)

    def add_transient(self, service: KeyLike, implementation: Any = None) -> ServiceCollection:
        """Register a transient service; a lone class registers itself."""
        return self._add_fluent(ServiceLifetime.TRANSIENT, service, implementation)

    def find(self, key: KeyLike) -> Registration | None:
        """Look up the registration for ``key`` without side effects."""
        return self._index.get(ServiceKey.of(key))

    def load_registries(
        self,
        records: RegistrySource | Iterable[RegistryRecord | Mapping[str, Any]],
        activator: Activator | None = None,
    ) -> list[Registration]:
        """Register every active registry row.

        Call at most once per collection with a given set of rows: loading
        keys that are already present fails like any duplicate ``add``.
        """
        return RegistryLoader(activator).load(records, self)

    def keys(self) -> list[ServiceKey]:
        with self._lock:
            return [registration.key for registration in self._registrations]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, type | str | ServiceKey):
            return False
        try:
            return self.find(key) is not None
        except InvalidServiceKeyError:
            return False

    def __iter__(self) -> Iterator[Registration]:
        with self._lock:
            return iter(list(self._registrations))

    def __len__(self) -> int:
        return len(self._registrations)

    def __repr__(self) -> str:
        return f"ServiceCollection(label={self._label!r}, registrations={len(self)})"
