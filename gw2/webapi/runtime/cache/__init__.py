"""Response cache implementations."""

from .base import CacheEntry, CacheMethod, NullCacheMethod
from .disk import DiskCacheMethod
from .memory import MemoryCacheMethod

__all__ = [
    "CacheEntry",
    "CacheMethod",
    "NullCacheMethod",
    "MemoryCacheMethod",
    "DiskCacheMethod",
]
