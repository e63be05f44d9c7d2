"""In-process cache backend: set-if-absent records and rate-limit counters."""

from __future__ import annotations

from metadata_api.core.cache import Cache


def test_add_only_writes_once() -> None:
    store = Cache(ttl_seconds=None, use_redis=False)

    assert store.add("name-record:0x01", "alice") is True
    assert store.add("name-record:0x01", "bob") is False
    assert store.get("name-record:0x01") == "alice"


def test_incr_counts_per_key() -> None:
    store = Cache(ttl_seconds=60, use_redis=False)

    assert [store.incr("rate:1.2.3.4:0", 60) for _ in range(3)] == [1, 2, 3]
    assert store.incr("rate:5.6.7.8:0", 60) == 1
