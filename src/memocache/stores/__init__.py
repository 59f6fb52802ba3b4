"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: stores/__init__.py.
"""

from .base import CacheStore, StoreFactory
from .registry import (
    create_cache_store,
    get_cache_backend,
    list_cache_backends,
    register_cache_backend,
    resolve_store_factory,
)
from .ttl import TTLStore

__all__ = [
    "CacheStore",
    "StoreFactory",
    "TTLStore",
    "register_cache_backend",
    "get_cache_backend",
    "resolve_store_factory",
    "create_cache_store",
    "list_cache_backends",
]
