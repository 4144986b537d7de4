#!/usr/bin/env python3
"""
Basic sievecache Demo
=====================

Walks through add, get, probe, delete, purge and dump on a small cache, and
shows which entry SIEVE evicts when the cache fills up.
"""

import sys

from sievecache import SieveCache
from sievecache.utils import initialize_logging


def basic_demo():
    """Core operations on a four-entry cache."""
    print("🚀 Basic sievecache Demo")
    print("=" * 50)

    cache = SieveCache(capacity=4, name="demo", log_evictions=True)

    print("\n📝 Adding 1..4...")
    for key, value in [(1, "hello"), (2, "foo"), (3, "bar"), (4, "gah")]:
        replaced = cache.add(key, value)
        print(f"add({key}, {value!r}) -> replaced={replaced}")

    print("\n🔁 Re-adding 1 (marks it visited)...")
    print(f"add(1, 'world') -> replaced={cache.add(1, 'world')}")

    print("\n📦 Cache contents (newest first):")
    cache.dump(sys.stdout)

    print("\n➕ Adding 5 into a full cache...")
    cache.add(5, "boo")
    print(f"get(2) -> {cache.get(2)}  (2 was the oldest unvisited entry)")
    print(f"get(1) -> {cache.get(1)}  (1 got a second chance)")

    print("\n🔍 Probe keeps existing values...")
    print(f"probe(3, 'ignored') -> {cache.probe(3, 'ignored')}")
    print(f"probe(6, 'new') -> {cache.probe(6, 'new')}")

    print("\n🗑️ Deleting 3...")
    print(f"delete(3) -> {cache.delete(3)}")
    print(f"delete(3) again -> {cache.delete(3)}")

    print(f"\nlen={len(cache)}, capacity={cache.capacity}")
    print(cache.get_metrics())

    cache.purge()
    print(f"\n🧹 After purge: len={len(cache)}")
    print("\n✅ Basic demo completed!")


if __name__ == "__main__":
    initialize_logging(log_level="DEBUG", log_format="text")
    basic_demo()
