# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
Service provider for wirebox.

A provider owns one ``ServiceCollection`` and one ``InstanceCache`` and
resolves keys against them. Providers are independent: nothing is shared
between two providers, including singletons.
"""

from __future__ import annotations

import threading
from types import TracebackType
from typing import Any

from wirebox.injection.cache import InstanceCache
from wirebox.injection.collection import ServiceCollection
from wirebox.injection.errors import (
    DisposalError,
    ProviderDisposedError,
    UnregisteredServiceError,
)
from wirebox.injection.keys import KeyLike, ServiceKey
from wirebox.injection.lifetime_policies import LIFETIME_POLICY_MAP
from wirebox.logging import get_logger

logger = get_logger(__name__)


class ServiceProvider:
    """Resolves services from the collection it owns.

    Example:
        ```python
        provider = ServiceProvider()
        provider.services.add_singleton(Clock, SystemClock)
        clock = provider.get_service(Clock)
        ```
    """

    def __init__(self, services: ServiceCollection | None = None) -> None:
        """
        Args:
            services: Collection to take ownership of; a fresh one when omitted
        """
        self._services = services if services is not None else ServiceCollection()
        self._cache = InstanceCache()
        self._disposed = False
        self._dispose_lock = threading.Lock()

    @property
    def services(self) -> ServiceCollection:
        """The collection owned by this provider."""
        return self._services

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def get_service(self, key: KeyLike) -> Any:
        """Resolve ``key`` to an instance.

        Transient services are built on every call. Singleton and scoped
        services are built once and then returned from this provider's cache.
        Exceptions raised while building propagate unchanged.

        Raises:
            UnregisteredServiceError: If nothing is registered for the key
            ProviderDisposedError: If the provider has been disposed
        """
        if self._disposed:
            raise ProviderDisposedError("get_service")

        service_key = ServiceKey.of(key)
        registration = self._services.find(service_key)
        if registration is None:
            raise UnregisteredServiceError(service_key.name, self._services.label)

        def build() -> Any:
            instance = registration.create(self)
            logger.debug(
                "Constructed service",
                service_key=service_key.name,
                lifetime=registration.lifetime.display_name,
                implementation=registration.implementation_name,
            )
            return instance

        policy = LIFETIME_POLICY_MAP[registration.lifetime]
        return policy.get_instance(self._cache, build, service_key)

    def is_registered(self, key: KeyLike) -> bool:
        return self._services.find(key) is not None

    def dispose(self) -> None:
        """Dispose cached instances in reverse creation order.

        Instances exposing ``dispose()`` or ``close()`` have it called. A
        failing instance does not stop the others from being disposed.
        Calling this more than once is a no-op.

        Raises:
            DisposalError: After every instance was tried, if any of them failed
        """
        with self._dispose_lock:
            if self._disposed:
                return
            self._disposed = True

        instances = self._cache.clear()
        errors: list[Exception] = []
        for instance in reversed(instances):
            try:
                _dispose_instance(instance)
            except Exception as exc:
                logger.error(
                    "Error disposing service instance",
                    exc_info=True,
                    instance_type=type(instance).__name__,
                )
                errors.append(exc)
        logger.debug(
            "Disposed service provider",
            collection=self._services.label,
            instances=len(instances),
            failures=len(errors),
        )
        if errors:
            raise DisposalError(errors) from errors[0]

    def __enter__(self) -> ServiceProvider:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"ServiceProvider({self._services!r}, {state})"


def _dispose_instance(instance: Any) -> None:
    for name in ("dispose", "close"):
        method = getattr(instance, name, None)
        if callable(method):
            method()
            return
