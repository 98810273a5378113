# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox

"""
Public API for the wirebox DI engine.
"""

from __future__ import annotations

from wirebox.injection.accessor import GlobalAccessor, get_service, services
from wirebox.injection.activator import Activator, ImportActivator, MappingActivator
from wirebox.injection.cache import InstanceCache
from wirebox.injection.collection import ServiceCollection
from wirebox.injection.errors import (
    AccessorStateError,
    DisposalError,
    DuplicateRegistrationError,
    InjectionError,
    InvalidLifetimeError,
    InvalidServiceKeyError,
    ProviderDisposedError,
    RegistrySourceError,
    TypeMismatchError,
    UnregisteredServiceError,
    UnresolvedImplementationError,
)
from wirebox.injection.keys import ServiceKey
from wirebox.injection.lifetime import ServiceLifetime
from wirebox.injection.provider import ServiceProvider
from wirebox.injection.registration import (
    DirectType,
    FactoryFunction,
    FactoryType,
    Registration,
    ServiceFactory,
)
from wirebox.injection.registry import (
    FileRegistrySource,
    RegistryLoader,
    RegistryRecord,
    RegistrySource,
    StaticRegistrySource,
)

__all__ = [
    "AccessorStateError",
    "Activator",
    "DirectType",
    "DisposalError",
    "DuplicateRegistrationError",
    "FactoryFunction",
    "FactoryType",
    "FileRegistrySource",
    "GlobalAccessor",
    "ImportActivator",
    "InjectionError",
    "InstanceCache",
    "InvalidLifetimeError",
    "InvalidServiceKeyError",
    "MappingActivator",
    "ProviderDisposedError",
    "Registration",
    "RegistryLoader",
    "RegistryRecord",
    "RegistrySource",
    "RegistrySourceError",
    "ServiceCollection",
    "ServiceFactory",
    "ServiceKey",
    "ServiceLifetime",
    "ServiceProvider",
    "StaticRegistrySource",
    "TypeMismatchError",
    "UnregisteredServiceError",
    "UnresolvedImplementationError",
    "get_service",
    "services",
]
