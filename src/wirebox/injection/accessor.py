# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
Process-wide default provider.

The default provider is created on first use and its collection is filled
from the registry source exactly once. Code that cannot receive a provider
explicitly resolves through ``get_service`` here.
"""

from __future__ import annotations

import threading
from typing import Any, ClassVar

from wirebox.config import get_settings
from wirebox.injection.activator import Activator
from wirebox.injection.collection import GLOBAL_LABEL, ServiceCollection
from wirebox.injection.errors import AccessorStateError
from wirebox.injection.keys import KeyLike
from wirebox.injection.provider import ServiceProvider
from wirebox.injection.registry import FileRegistrySource, RegistrySource
from wirebox.logging import get_logger

logger = get_logger(__name__)


class GlobalAccessor:
    """Holder of the lazily created default provider.

    All state is class level; the class is never instantiated. While the
    registry is loading, the thread doing the load (for example a module
    imported by the activator) already sees the new provider; other threads
    wait until loading is finished.
    """

    _provider: ClassVar[ServiceProvider | None] = None
    _loading: ClassVar[ServiceProvider | None] = None
    _source: ClassVar[RegistrySource | None] = None
    _activator: ClassVar[Activator | None] = None
    _lock: ClassVar[threading.RLock] = threading.RLock()

    def __new__(cls, *args: Any, **kwargs: Any) -> GlobalAccessor:
        raise TypeError("GlobalAccessor is not instantiable; use its class methods")

    @classmethod
    def configure(
        cls,
        source: RegistrySource | None = None,
        activator: Activator | None = None,
    ) -> None:
        """Choose the registry source and activator used on first access.

        Raises:
            AccessorStateError: If the default provider already exists
        """
        with cls._lock:
            if cls._provider is not None or cls._loading is not None:
                raise AccessorStateError(
                    "Global services are already initialized; configure before first use "
                    "or call GlobalAccessor.reset()"
                )
            cls._source = source
            cls._activator = activator

    @classmethod
    def provider(cls) -> ServiceProvider:
        """Return the default provider, creating and loading it on first call."""
        provider = cls._provider
        if provider is not None:
            return provider

        with cls._lock:
            if cls._provider is not None:
                return cls._provider
            if cls._loading is not None:
                # Re-entered from the loading thread
                return cls._loading

            provider = ServiceProvider(ServiceCollection(label=GLOBAL_LABEL))
            cls._loading = provider
            try:
                cls._load(provider.services)
            finally:
                cls._loading = None
            cls._provider = provider
            return provider

    @classmethod
    def _load(cls, collection: ServiceCollection) -> None:
        source = cls._source
        if source is None:
            registry_path = get_settings().registry_path
            if registry_path is not None:
                source = FileRegistrySource(registry_path)

        if source is None:
            logger.debug("No registry source configured for global services")
            return
        collection.load_registries(source, cls._activator)

    @classmethod
    def services(cls) -> ServiceCollection:
        """The global collection, for adding registrations in code."""
        return cls.provider().services

    @classmethod
    def get_service(cls, key: KeyLike) -> Any:
        """Resolve ``key`` from the default provider."""
        return cls.provider().get_service(key)

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._provider is not None

    @classmethod
    def reset(cls) -> None:
        """Dispose the default provider and forget configuration.

        Meant for test teardown. The next access creates and loads a new
        provider.
        """
        with cls._lock:
            provider = cls._provider
            cls._provider = None
            cls._source = None
            cls._activator = None
        if provider is not None:
            provider.dispose()


def get_service(key: KeyLike) -> Any:
    """Resolve ``key`` from the global services."""
    return GlobalAccessor.get_service(key)


def services() -> ServiceCollection:
    """The global service collection."""
    return GlobalAccessor.services()
