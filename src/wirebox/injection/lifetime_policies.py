# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""Instance reuse rules, one policy per lifetime."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from wirebox.injection.cache import InstanceCache
from wirebox.injection.keys import ServiceKey
from wirebox.injection.lifetime import ServiceLifetime


class SingletonPolicy:
    # Providers are not nested, so a singleton lives in its provider's cache.
    def get_instance(
        self, cache: InstanceCache, factory: Callable[[], Any], key: ServiceKey
    ) -> Any:
        return cache.get_or_create(key, factory)


class ScopedPolicy:
    def get_instance(
        self, cache: InstanceCache, factory: Callable[[], Any], key: ServiceKey
    ) -> Any:
        return cache.get_or_create(key, factory)


class TransientPolicy:
    def get_instance(
        self, cache: InstanceCache, factory: Callable[[], Any], key: ServiceKey
    ) -> Any:
        return factory()


LIFETIME_POLICY_MAP = {
    ServiceLifetime.SINGLETON: SingletonPolicy(),
    ServiceLifetime.SCOPED: ScopedPolicy(),
    ServiceLifetime.TRANSIENT: TransientPolicy(),
}
