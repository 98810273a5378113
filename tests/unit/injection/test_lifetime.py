from __future__ import annotations

import pytest

from wirebox.injection import InvalidLifetimeError, ServiceLifetime
from wirebox.injection.lifetime_policies import (
    LIFETIME_POLICY_MAP,
    ScopedPolicy,
    SingletonPolicy,
    TransientPolicy,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Singleton", ServiceLifetime.SINGLETON),
        ("SCOPED", ServiceLifetime.SCOPED),
        (" transient ", ServiceLifetime.TRANSIENT),
        (ServiceLifetime.SCOPED, ServiceLifetime.SCOPED),
    ],
)
def test_parse(value, expected):
    assert ServiceLifetime.parse(value) is expected


@pytest.mark.parametrize("value", ["Forever", "", None, 1])
def test_parse_rejects_unknown_values(value):
    with pytest.raises(InvalidLifetimeError) as exc_info:
        ServiceLifetime.parse(value)

    assert "expected Singleton, Scoped or Transient" in exc_info.value.message


def test_display_name_and_caching():
    assert ServiceLifetime.SINGLETON.display_name == "Singleton"
    assert ServiceLifetime.SINGLETON.is_cached
    assert ServiceLifetime.SCOPED.is_cached
    assert not ServiceLifetime.TRANSIENT.is_cached


def test_every_lifetime_has_a_policy():
    assert isinstance(LIFETIME_POLICY_MAP[ServiceLifetime.SINGLETON], SingletonPolicy)
    assert isinstance(LIFETIME_POLICY_MAP[ServiceLifetime.SCOPED], ScopedPolicy)
    assert isinstance(LIFETIME_POLICY_MAP[ServiceLifetime.TRANSIENT], TransientPolicy)
