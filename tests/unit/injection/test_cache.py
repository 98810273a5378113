from __future__ import annotations

import threading
import time

from wirebox.injection import InstanceCache, ServiceKey
from wirebox.injection.lifetime_policies import ScopedPolicy, TransientPolicy


def test_get_or_create_builds_once():
    cache = InstanceCache()
    key = ServiceKey.of("service")
    calls = []

    def factory():
        calls.append(1)
        return object()

    first = cache.get_or_create(key, factory)
    second = cache.get_or_create(key, factory)

    assert first is second
    assert len(calls) == 1
    assert key in cache
    assert cache.get(key) is first
    assert len(cache) == 1


def test_concurrent_first_resolution_builds_one_instance():
    cache = InstanceCache()
    key = ServiceKey.of("slow")
    barrier = threading.Barrier(8)
    built = []
    results = []

    def factory():
        built.append(1)
        time.sleep(0.01)
        return object()

    def worker():
        barrier.wait()
        results.append(cache.get_or_create(key, factory))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(built) == 1
    assert len({id(result) for result in results}) == 1


def test_factory_may_resolve_other_keys_reentrantly():
    cache = InstanceCache()
    outer = ServiceKey.of("outer")
    inner = ServiceKey.of("inner")

    value = cache.get_or_create(
        outer, lambda: ("outer", cache.get_or_create(inner, lambda: "inner"))
    )

    assert value == ("outer", "inner")
    assert cache.keys() == [inner, outer]


def test_clear_returns_instances_in_creation_order():
    cache = InstanceCache()
    cache.get_or_create(ServiceKey.of("a"), lambda: "A")
    cache.get_or_create(ServiceKey.of("b"), lambda: "B")

    assert cache.clear() == ["A", "B"]
    assert len(cache) == 0


def test_transient_policy_never_touches_cache():
    cache = InstanceCache()
    key = ServiceKey.of("t")

    first = TransientPolicy().get_instance(cache, object, key)
    second = TransientPolicy().get_instance(cache, object, key)

    assert first is not second
    assert key not in cache


def test_scoped_policy_uses_cache():
    cache = InstanceCache()
    key = ServiceKey.of("s")

    first = ScopedPolicy().get_instance(cache, object, key)

    assert ScopedPolicy().get_instance(cache, object, key) is first
