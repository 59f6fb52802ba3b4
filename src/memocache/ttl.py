"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Shortcuts that pre-bind the memoization helpers to `TTLStore`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .config import CacheOptions
from .memoize import (
    AsyncCachedFunction,
    CachedFunction,
    CallMode,
    Resolver,
    memoize,
    wrap,
)
from .methods import CachedMethods, bind_methods
from .stores.ttl import TTLStore


def ttl_cached(
    func: Callable[..., Any],
    resolver: Resolver | None = None,
    options: CacheOptions | Mapping[str, Any] | None = None,
    *,
    mode: CallMode | str = CallMode.SYNC,
) -> CachedFunction[Any] | AsyncCachedFunction[Any]:
    """`wrap` with a `TTLStore` backend."""
    return wrap(TTLStore, func, resolver, options, mode=mode)


def ttl_memoize(
    options: CacheOptions | Mapping[str, Any] | None = None,
    resolver: Resolver | None = None,
    *,
    mode: CallMode | str = CallMode.SYNC,
) -> Callable[[Callable[..., Any]], CachedFunction[Any] | AsyncCachedFunction[Any]]:
    """`memoize` with a `TTLStore` backend."""
    return memoize(TTLStore, options, resolver, mode=mode)


def ttl_cached_methods(
    obj: object,
    methods: Mapping[str, CacheOptions | Mapping[str, Any] | None],
    prefix: str = "_",
    *,
    async_methods: Iterable[str] = (),
) -> CachedMethods:
    """`bind_methods` with a `TTLStore` backend."""
    return bind_methods(TTLStore, obj, methods, prefix, async_methods=async_methods)
