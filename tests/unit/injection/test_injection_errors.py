from __future__ import annotations

from wirebox.errors import ErrorSeverity, WireboxError
from wirebox.injection import (
    DisposalError,
    DuplicateRegistrationError,
    InjectionError,
    ProviderDisposedError,
    RegistrySourceError,
    UnregisteredServiceError,
    UnresolvedImplementationError,
)
from wirebox.injection.errors import (
    INJECTION,
    INJECTION_DUPLICATE_REGISTRATION,
    INJECTION_ERROR,
)


def test_duplicate_registration_payload():
    error = DuplicateRegistrationError("Cow", "Transient", "Scoped", "global services")

    assert error.code == INJECTION_DUPLICATE_REGISTRATION
    assert error.category == INJECTION
    assert error.context == {
        "service_key": "Cow",
        "lifetime": "Transient",
        "existing_lifetime": "Scoped",
        "collection": "global services",
    }
    assert str(error) == (
        "INJECTION_DUPLICATE_REGISTRATION: Cannot register 'Cow' as Transient in "
        "global services: it is already registered as Scoped"
    )


def test_errors_share_injection_base():
    for error in (
        UnregisteredServiceError("Cow"),
        UnresolvedImplementationError("farm.Cow", "missing"),
        ProviderDisposedError("get_service"),
        RegistrySourceError("bad rows", source="registry.json"),
    ):
        assert isinstance(error, InjectionError)
        assert isinstance(error, WireboxError)
        assert error.category == INJECTION


def test_unresolved_without_record():
    error = UnresolvedImplementationError("farm.Cow", "not found")

    assert error.record is None
    assert "record" not in error.context
    assert error.message == "Implementation 'farm.Cow' cannot be resolved: not found"


def test_injection_error_defaults():
    error = InjectionError("generic", severity=ErrorSeverity.WARNING)

    assert error.code is INJECTION_ERROR
    assert error.to_dict()["severity"] == "warning"


def test_disposal_error_lists_failures():
    first = RuntimeError("socket busy")
    error = DisposalError([first, ValueError("bad state")])

    assert error.errors[0] is first
    assert error.context["failures"] == [
        "RuntimeError: socket busy",
        "ValueError: bad state",
    ]
    assert str(error) == "INJECTION_DISPOSAL: 2 service instance(s) failed to dispose"
