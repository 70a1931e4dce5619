# src/radheat_core/cache/__init__.py
"""
Exposes the public interface of the cache package.
"""
from .service import KernelCache
from .keys import KernelCacheKey, create_kernel_key
from .storage import read_cache_file, write_cache_file
from .exceptions import CacheFormatError, CachePreloadFailure, CacheWriteFailure

__all__ = [
    "KernelCache",
    "KernelCacheKey",
    "create_kernel_key",
    "read_cache_file",
    "write_cache_file",
    "CacheFormatError",
    "CachePreloadFailure",
    "CacheWriteFailure",
]
