"""
sievecache - SIEVE Caching for Python
=====================================

A thread-safe, fixed-capacity in-memory cache using the SIEVE eviction policy.
"""

__version__ = "0.1.0"

from .core.cache import SieveCache, CacheMetrics

# Export base classes for custom implementations
from .cache_store import (
    BaseCacheStore,
    EvictionPolicy,
    EntryArena,
    SieveEvictionPolicy,
)
from .exceptions import SieveCacheError, ConfigurationError, CacheOperationError

__all__ = [
    "SieveCache",
    "CacheMetrics",
    "BaseCacheStore",
    "EvictionPolicy",
    "EntryArena",
    "SieveEvictionPolicy",
    "SieveCacheError",
    "ConfigurationError",
    "CacheOperationError",
]
