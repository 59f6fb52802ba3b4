"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: stores/registry.py.
"""

from __future__ import annotations

from collections.abc import Mapping
from threading import Lock
from typing import Any

from ..config import CacheOptions, CacheSettings, resolve_cache_options
from ..errors import CacheBackendError
from .base import CacheStore, StoreFactory
from .ttl import TTLStore

_REGISTRY: dict[str, StoreFactory] = {}
_LOCK = Lock()


def _normalize(backend_id: str) -> str:
    return str(backend_id).strip().lower()


def register_cache_backend(
    backend_id: str,
    factory: StoreFactory,
    *,
    overwrite: bool = False,
) -> None:
    """Register one store factory by id."""
    key = _normalize(backend_id)
    if not key:
        raise CacheBackendError("Cache backend id must be non-empty")
    if not callable(factory):
        raise CacheBackendError(f"Cache backend '{key}' factory must be callable")

    with _LOCK:
        if key in _REGISTRY and not overwrite:
            raise CacheBackendError(f"Cache backend already registered: {key}")
        _REGISTRY[key] = factory


def get_cache_backend(backend_id: str) -> StoreFactory:
    """Resolve one store factory by id."""
    key = _normalize(backend_id)
    with _LOCK:
        factory = _REGISTRY.get(key)
    if factory is None:
        raise CacheBackendError(f"Unknown cache backend '{backend_id}'")
    return factory


def resolve_store_factory(store: str | StoreFactory | None) -> StoreFactory:
    """
    Passthrough factories, resolve ids through the registry.

    `None` resolves the backend named by `MEMOCACHE_BACKEND` (default `ttl`).
    """
    if store is None:
        store = CacheSettings.from_env().backend
    if isinstance(store, str):
        return get_cache_backend(store)
    return store


def create_cache_store(
    backend: str | StoreFactory | None = None,
    options: CacheOptions | Mapping[str, Any] | None = None,
) -> CacheStore:
    """
    Build one store instance from a backend id or factory.

    Missing `backend`/`options` fall back to `CacheSettings.from_env()`.
    """
    return resolve_store_factory(backend)(resolve_cache_options(options))


def list_cache_backends() -> list[str]:
    """List registered backend ids."""
    with _LOCK:
        return sorted(_REGISTRY.keys())


register_cache_backend("ttl", TTLStore)
