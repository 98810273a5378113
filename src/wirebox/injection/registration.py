# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
Registrations and construction strategies.

A registration ties a ``ServiceKey`` to a lifetime and to the strategy that
builds instances. Strategies never inspect constructor signatures: direct
types are called with no arguments and factories receive the provider so
they can pull their own dependencies.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeAlias, TypeVar

from wirebox.injection.errors import TypeMismatchError
from wirebox.injection.keys import ServiceKey, qualified_name
from wirebox.injection.lifetime import ServiceLifetime

if TYPE_CHECKING:
    from wirebox.injection.provider import ServiceProvider

T = TypeVar("T")


class ServiceFactory(ABC, Generic[T]):
    """Factory capability: build one service from the provider.

    Subclasses must be constructible with no arguments.

    Example:
        ```python
        class ReportServiceFactory(ServiceFactory[ReportService]):
            def initialize(self, provider):
                return ReportService(provider.get_service(Database))
        ```
    """

    @abstractmethod
    def initialize(self, provider: ServiceProvider) -> T:
        """Create the service instance."""


@dataclass(frozen=True, slots=True)
class DirectType:
    """Instantiate a class with no arguments."""

    implementation: type[Any]

    @property
    def implementation_name(self) -> str:
        return qualified_name(self.implementation)

    def create(self, provider: ServiceProvider) -> Any:
        return self.implementation()


@dataclass(frozen=True, slots=True)
class FactoryType:
    """Instantiate a ``ServiceFactory`` and call ``initialize(provider)``.

    An already constructed factory object is used as is.
    """

    factory: type[ServiceFactory[Any]] | ServiceFactory[Any]

    @property
    def implementation_name(self) -> str:
        factory = self.factory
        if not inspect.isclass(factory):
            factory = type(factory)
        return qualified_name(factory)

    def create(self, provider: ServiceProvider) -> Any:
        factory = self.factory() if inspect.isclass(self.factory) else self.factory
        return factory.initialize(provider)


@dataclass(frozen=True, slots=True)
class FactoryFunction:
    """Call a plain function with the provider."""

    function: Callable[[ServiceProvider], Any]

    @property
    def implementation_name(self) -> str:
        module = getattr(self.function, "__module__", None)
        name = getattr(self.function, "__qualname__", repr(self.function))
        return f"{module}.{name}" if module else name

    def create(self, provider: ServiceProvider) -> Any:
        return self.function(provider)


Strategy: TypeAlias = DirectType | FactoryType | FactoryFunction

_STRATEGY_TYPES = (DirectType, FactoryType, FactoryFunction)


def strategy_for(implementation: Any) -> Strategy:
    """Pick the construction strategy for an implementation.

    Raises:
        TypeError: If the implementation is neither a class nor a callable
    """
    if isinstance(implementation, _STRATEGY_TYPES):
        return implementation
    if inspect.isclass(implementation):
        if issubclass(implementation, ServiceFactory):
            return FactoryType(implementation)
        return DirectType(implementation)
    if isinstance(implementation, ServiceFactory):
        return FactoryType(implementation)
    if callable(implementation):
        return FactoryFunction(implementation)
    raise TypeError(
        f"Cannot register {implementation!r}: expected a class, a ServiceFactory or a callable"
    )


def check_conformance(key: ServiceKey, strategy: Strategy) -> None:
    """Ensure a direct implementation extends the class it is registered for.

    Only keys built from concrete classes are checked; string keys and
    Protocol keys cannot be validated statically.

    Raises:
        TypeMismatchError: If the implementation does not subclass the key type
    """
    service_type = key.service_type
    if service_type is None or not isinstance(strategy, DirectType):
        return
    if getattr(service_type, "_is_protocol", False):
        return
    if not issubclass(strategy.implementation, service_type):
        raise TypeMismatchError(service_type, strategy.implementation)


@dataclass(frozen=True, slots=True)
class Registration:
    """Immutable record of one service registration."""

    key: ServiceKey
    lifetime: ServiceLifetime
    strategy: Strategy

    @property
    def implementation_name(self) -> str:
        return self.strategy.implementation_name

    @property
    def is_factory(self) -> bool:
        return not isinstance(self.strategy, DirectType)

    def create(self, provider: ServiceProvider) -> Any:
        """Build a new instance; caching is the provider's concern."""
        return self.strategy.create(provider)
