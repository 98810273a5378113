# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
Per-provider instance cache for Singleton and Scoped services.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from wirebox.injection.keys import ServiceKey

_MISSING = object()


class InstanceCache:
    """Mapping of service keys to realized instances, owned by one provider.

    ``get_or_create`` is atomic per key: concurrent first resolutions of the
    same key construct a single instance. Each key lock is reentrant, so a
    factory may resolve other cached services on the same thread while its
    own key is locked.
    """

    def __init__(self) -> None:
        self._instances: dict[ServiceKey, Any] = {}
        self._key_locks: dict[ServiceKey, threading.RLock] = {}
        self._lock = threading.Lock()

    def get(self, key: ServiceKey, default: Any = None) -> Any:
        return self._instances.get(key, default)

    def get_or_create(self, key: ServiceKey, factory: Callable[[], Any]) -> Any:
        """Return the cached instance for ``key``, constructing it on first use."""
        instance = self._instances.get(key, _MISSING)
        if instance is not _MISSING:
            return instance

        with self._lock_for(key):
            instance = self._instances.get(key, _MISSING)
            if instance is not _MISSING:
                return instance
            instance = factory()
            with self._lock:
                self._instances[key] = instance
            return instance

    def _lock_for(self, key: ServiceKey) -> threading.RLock:
        with self._lock:
            key_lock = self._key_locks.get(key)
            if key_lock is None:
                key_lock = self._key_locks[key] = threading.RLock()
            return key_lock

    def keys(self) -> list[ServiceKey]:
        with self._lock:
            return list(self._instances)

    def clear(self) -> list[Any]:
        """Drop every entry and return the instances in creation order."""
        with self._lock:
            instances = list(self._instances.values())
            self._instances.clear()
            self._key_locks.clear()
        return instances

    def __contains__(self, key: object) -> bool:
        return key in self._instances

    def __len__(self) -> int:
        return len(self._instances)
