"""Core cache implementation."""

from .cache import SieveCache, CacheMetrics

__all__ = ["SieveCache", "CacheMetrics"]
