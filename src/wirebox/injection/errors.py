# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
Error classes for the wirebox dependency injection engine.

All errors are raised synchronously where the failure happens and are
never retried or converted into a fallback value.
"""

from __future__ import annotations

from typing import Any, Final

from wirebox.errors.base import ErrorCategory, ErrorCode, ErrorSeverity, WireboxError

INJECTION: Final = ErrorCategory.get_or_create("INJECTION")
INJECTION_ERROR: Final = ErrorCode.get_or_create("INJECTION_ERROR", INJECTION)
INJECTION_INVALID_KEY: Final = ErrorCode.get_or_create(
    "INJECTION_INVALID_KEY", INJECTION
)
INJECTION_INVALID_LIFETIME: Final = ErrorCode.get_or_create(
    "INJECTION_INVALID_LIFETIME", INJECTION
)
INJECTION_DUPLICATE_REGISTRATION: Final = ErrorCode.get_or_create(
    "INJECTION_DUPLICATE_REGISTRATION", INJECTION
)
INJECTION_SERVICE_NOT_REGISTERED: Final = ErrorCode.get_or_create(
    "INJECTION_SERVICE_NOT_REGISTERED", INJECTION
)
INJECTION_UNRESOLVED_IMPLEMENTATION: Final = ErrorCode.get_or_create(
    "INJECTION_UNRESOLVED_IMPLEMENTATION", INJECTION
)
INJECTION_TYPE_MISMATCH: Final = ErrorCode.get_or_create(
    "INJECTION_TYPE_MISMATCH", INJECTION
)
INJECTION_PROVIDER_DISPOSED: Final = ErrorCode.get_or_create(
    "INJECTION_PROVIDER_DISPOSED", INJECTION
)
INJECTION_ACCESSOR_STATE: Final = ErrorCode.get_or_create(
    "INJECTION_ACCESSOR_STATE", INJECTION
)
INJECTION_DISPOSAL: Final = ErrorCode.get_or_create("INJECTION_DISPOSAL", INJECTION)
INJECTION_REGISTRY_SOURCE: Final = ErrorCode.get_or_create(
    "INJECTION_REGISTRY_SOURCE", INJECTION
)


class InjectionError(WireboxError):
    """Base class for all DI-related errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = INJECTION_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            code=code,
            severity=severity,
            context=context,
            **kwargs,
        )


class InvalidServiceKeyError(InjectionError):
    """Raised when a value cannot be turned into a service key."""

    def __init__(self, value: Any, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Invalid service key {value!r}: {reason}",
            code=INJECTION_INVALID_KEY,
            value=repr(value),
            reason=reason,
            **kwargs,
        )


class InvalidLifetimeError(InjectionError):
    """Raised when a lifetime value is not Singleton, Scoped or Transient."""

    def __init__(self, value: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Invalid service lifetime {value!r}; expected Singleton, Scoped or Transient",
            code=INJECTION_INVALID_LIFETIME,
            value=repr(value),
            **kwargs,
        )


class DuplicateRegistrationError(InjectionError):
    """Raised when a key is registered twice in the same collection.

    The check ignores lifetime and strategy: any second registration for a
    key is rejected and the collection is left unchanged.
    """

    def __init__(
        self,
        service_key: str,
        lifetime: str,
        existing_lifetime: str,
        collection: str = "services",
        **kwargs: Any,
    ) -> None:
        message = (
            f"Cannot register '{service_key}' as {lifetime} in {collection}: "
            f"it is already registered as {existing_lifetime}"
        )
        super().__init__(
            message,
            code=INJECTION_DUPLICATE_REGISTRATION,
            service_key=service_key,
            lifetime=lifetime,
            existing_lifetime=existing_lifetime,
            collection=collection,
            **kwargs,
        )
        self.service_key = service_key
        self.lifetime = lifetime
        self.existing_lifetime = existing_lifetime
        self.collection = collection


class UnregisteredServiceError(InjectionError):
    """Raised when resolving a key that has no registration."""

    def __init__(
        self, service_key: str, collection: str = "services", **kwargs: Any
    ) -> None:
        super().__init__(
            f"No registration for '{service_key}' in {collection}",
            code=INJECTION_SERVICE_NOT_REGISTERED,
            service_key=service_key,
            collection=collection,
            **kwargs,
        )
        self.service_key = service_key


class UnresolvedImplementationError(InjectionError):
    """Raised when an implementation name cannot be turned into a class or factory."""

    def __init__(
        self,
        implementation: str,
        reason: str,
        record: str | None = None,
        **kwargs: Any,
    ) -> None:
        if record is not None:
            message = (
                f"Registry record '{record}' names implementation "
                f"'{implementation}' which cannot be resolved: {reason}"
            )
            kwargs["record"] = record
        else:
            message = f"Implementation '{implementation}' cannot be resolved: {reason}"
        super().__init__(
            message,
            code=INJECTION_UNRESOLVED_IMPLEMENTATION,
            implementation=implementation,
            reason=reason,
            **kwargs,
        )
        self.implementation = implementation
        self.record = record


class TypeMismatchError(InjectionError):
    """Raised when a direct implementation does not extend its service type."""

    def __init__(self, interface: type[Any], implementation: type[Any], **kwargs: Any) -> None:
        super().__init__(
            f"Implementation {implementation.__name__} must be a subclass of {interface.__name__}",
            code=INJECTION_TYPE_MISMATCH,
            expected_type=interface.__name__,
            actual_type=implementation.__name__,
            **kwargs,
        )


class ProviderDisposedError(InjectionError):
    """Raised when a disposed provider is asked for a service."""

    def __init__(self, operation: str, **kwargs: Any) -> None:
        super().__init__(
            f"Service provider has been disposed and cannot perform: {operation}",
            code=INJECTION_PROVIDER_DISPOSED,
            operation=operation,
            **kwargs,
        )


class AccessorStateError(InjectionError):
    """Raised when the global accessor is reconfigured after first use."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, code=INJECTION_ACCESSOR_STATE, **kwargs)


class RegistrySourceError(InjectionError):
    """Raised when registry records cannot be read or validated."""

    def __init__(self, message: str, source: str | None = None, **kwargs: Any) -> None:
        if source is not None:
            kwargs["source"] = source
        super().__init__(message, code=INJECTION_REGISTRY_SOURCE, **kwargs)


class DisposalError(InjectionError):
    """Raised after disposal when one or more instances failed to dispose.

    Every cached instance is still given the chance to dispose; ``errors``
    holds the exceptions in the order they were raised.
    """

    def __init__(self, errors: list[Exception], **kwargs: Any) -> None:
        super().__init__(
            f"{len(errors)} service instance(s) failed to dispose",
            code=INJECTION_DISPOSAL,
            failures=[f"{type(error).__name__}: {error}" for error in errors],
            **kwargs,
        )
        self.errors = errors
