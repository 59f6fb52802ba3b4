"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Memoization layer with pluggable cache stores.

Quick start::

    from memocache import TTLStore, wrap

    lookup = wrap(TTLStore, load_user, options={"max_age": 30})
    lookup("u-1")          # calls load_user
    lookup("u-1")          # served from lookup.cache
    lookup.direct("u-1")   # always calls load_user and refreshes the entry
"""

from .config import CacheOptions, CacheSettings
from .errors import (
    CacheBackendError,
    CacheConfigError,
    CacheError,
    InvalidCacheArgumentError,
)
from .memoize import (
    EMPTY_ARGS_KEY,
    AsyncCachedFunction,
    CachedFunction,
    CallMode,
    default_cache_key,
    memoize,
    wrap,
)
from .methods import CachedMethods, bind_methods
from .scheduling import AsyncioTimerScheduler, ThreadTimerScheduler
from .stores import (
    CacheStore,
    TTLStore,
    create_cache_store,
    list_cache_backends,
    register_cache_backend,
)
from .ttl import ttl_cached, ttl_cached_methods, ttl_memoize

__all__ = [
    "CacheOptions",
    "CacheSettings",
    "CacheError",
    "InvalidCacheArgumentError",
    "CacheConfigError",
    "CacheBackendError",
    "EMPTY_ARGS_KEY",
    "CallMode",
    "CachedFunction",
    "AsyncCachedFunction",
    "default_cache_key",
    "wrap",
    "memoize",
    "CachedMethods",
    "bind_methods",
    "ThreadTimerScheduler",
    "AsyncioTimerScheduler",
    "CacheStore",
    "TTLStore",
    "register_cache_backend",
    "create_cache_store",
    "list_cache_backends",
    "ttl_cached",
    "ttl_memoize",
    "ttl_cached_methods",
]
