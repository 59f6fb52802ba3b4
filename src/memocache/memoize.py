"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Memoization wrappers that bind a function to its own cache store.
"""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Awaitable, Callable, Hashable, Mapping
from enum import Enum
from typing import Any, Generic, TypeVar

from .config import CacheOptions, resolve_cache_options
from .errors import InvalidCacheArgumentError
from .stores.base import CacheStore, StoreFactory
from .stores.registry import resolve_store_factory

logger = logging.getLogger("memocache.memoize")

R = TypeVar("R")

Resolver = Callable[..., Hashable]

EMPTY_ARGS_KEY = "<no-args>"

FUNC_ERROR_TEXT = "Expected a function"


class CallMode(str, Enum):
    """How the wrapped function produces its result. Declared at wrap time."""

    SYNC = "sync"
    ASYNC = "async"


def _json_ready(value: Any) -> Any:
    # json.dumps only accepts scalar dict keys and sort_keys needs them comparable.
    if isinstance(value, Mapping):
        return {
            key if isinstance(key, str) else repr(key): _json_ready(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_json_ready(item) for item in value]
    return value


def _dumps(payload: Any) -> str:
    return json.dumps(
        _json_ready(payload),
        separators=(",", ":"),
        sort_keys=True,
        ensure_ascii=False,
        default=repr,
    )


def default_cache_key(args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> str:
    """
    Serialize call arguments into a compact JSON key.

    Positional-only calls serialize as a JSON array (`f(3)` -> `[3]`). Calls
    with keyword arguments serialize as `{"args": [...], "kwargs": {...}}`.
    Non-string dict keys are written as their `repr`, and values JSON cannot
    encode fall back to their `repr`.
    """
    if not args and not kwargs:
        return EMPTY_ARGS_KEY
    if kwargs:
        return _dumps({"args": list(args), "kwargs": dict(kwargs)})
    return _dumps(list(args))


def direct_cache_key(args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> Hashable:
    """
    Bypass-path key without a resolver: the first positional argument as-is.

    Unhashable first arguments (lists, dicts) are serialized to JSON instead.
    """
    _ = kwargs
    if not args:
        return EMPTY_ARGS_KEY
    first = args[0]
    try:
        hash(first)
    except TypeError:
        return _dumps(first)
    return first


class _CachedBase(Generic[R]):
    def __init__(
        self,
        store: StoreFactory,
        func: Callable[..., Any],
        resolver: Resolver | None,
        options: CacheOptions,
    ) -> None:
        functools.update_wrapper(self, func)
        self.func = func
        self._resolver = resolver
        self._name = getattr(func, "__qualname__", repr(func))
        self.cache: CacheStore[R] = store(options)

    def _key(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Hashable:
        if self._resolver is not None:
            return self._resolver(*args, **kwargs)
        return default_cache_key(args, kwargs)

    def _direct_key(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Hashable:
        if self._resolver is not None:
            return self._resolver(*args, **kwargs)
        return direct_cache_key(args, kwargs)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name} cache={type(self.cache).__name__}>"


class CachedFunction(_CachedBase[R]):
    """
    A synchronous function bound to exactly one cache store.

    Calling the object returns the cached value for the resolved key, or
    invokes `func` and stores its result on a miss. `direct` always invokes
    `func` and overwrites the entry. Exceptions raised by `func` propagate
    unchanged and nothing is stored.
    """

    def __call__(self, *args: Any, **kwargs: Any) -> R:
        key = self._key(args, kwargs)
        cache = self.cache
        if cache.has(key):
            logger.debug("Cache hit for %s key=%r", self._name, key)
            return cache.get(key)  # type: ignore[return-value]
        logger.debug("Cache miss for %s key=%r", self._name, key)
        result = self.func(*args, **kwargs)
        cache.set(key, result)
        return result

    def direct(self, *args: Any, **kwargs: Any) -> R:
        key = self._direct_key(args, kwargs)
        result = self.func(*args, **kwargs)
        self.cache.set(key, result)
        logger.debug("Refreshed %s key=%r", self._name, key)
        return result


class AsyncCachedFunction(_CachedBase[R]):
    """
    Coroutine-function counterpart of `CachedFunction`.

    The store is consulted before the inner call is awaited and written after
    it completes. Two overlapping calls for the same key can therefore both
    miss and both run `func`; the later completion wins in the store.
    """

    async def __call__(self, *args: Any, **kwargs: Any) -> R:
        key = self._key(args, kwargs)
        cache = self.cache
        if cache.has(key):
            logger.debug("Cache hit for %s key=%r", self._name, key)
            return cache.get(key)  # type: ignore[return-value]
        logger.debug("Cache miss for %s key=%r", self._name, key)
        result = await self.func(*args, **kwargs)
        cache.set(key, result)
        return result

    async def direct(self, *args: Any, **kwargs: Any) -> R:
        key = self._direct_key(args, kwargs)
        result = await self.func(*args, **kwargs)
        self.cache.set(key, result)
        logger.debug("Refreshed %s key=%r", self._name, key)
        return result


def _coerce_mode(mode: CallMode | str) -> CallMode:
    try:
        return CallMode(mode)
    except ValueError as exc:
        raise InvalidCacheArgumentError(f"Unknown call mode: {mode!r}") from exc


def wrap(
    store: str | StoreFactory | None,
    func: Callable[..., Any],
    resolver: Resolver | None = None,
    options: CacheOptions | Mapping[str, Any] | None = None,
    *,
    mode: CallMode | str = CallMode.SYNC,
) -> CachedFunction[Any] | AsyncCachedFunction[Any]:
    """
    Bind `func` to a freshly created store.

    Args:
        store: Store factory (for example `TTLStore`), registered backend id,
            or `None` for the backend named by `MEMOCACHE_BACKEND`.
        func: Function to memoize. Must be a coroutine function when
            `mode` is `CallMode.ASYNC`.
        resolver: Optional `(*args, **kwargs) -> key` callable. Defaults to
            JSON serialization of the arguments on the cached path and the
            first positional argument on the `direct` path.
        options: Store options, forwarded to the store factory. `None`
            falls back to `MEMOCACHE_MAX_AGE_S`/`MEMOCACHE_MAX_SIZE`.
        mode: Declared call shape of `func`.

    Raises:
        InvalidCacheArgumentError: `func` or `resolver` is not callable.
        CacheConfigError: `options` fail validation.
        CacheBackendError: `store` names an unknown backend.
    """
    if not callable(func) or (resolver is not None and not callable(resolver)):
        raise InvalidCacheArgumentError(FUNC_ERROR_TEXT)
    resolved_mode = _coerce_mode(mode)
    factory = resolve_store_factory(store)
    resolved_options = resolve_cache_options(options)
    if resolved_mode is CallMode.ASYNC:
        return AsyncCachedFunction(factory, func, resolver, resolved_options)
    return CachedFunction(factory, func, resolver, resolved_options)


def memoize(
    store: str | StoreFactory | None,
    options: CacheOptions | Mapping[str, Any] | None = None,
    resolver: Resolver | None = None,
    *,
    mode: CallMode | str = CallMode.SYNC,
) -> Callable[[Callable[..., Any]], CachedFunction[Any] | AsyncCachedFunction[Any]]:
    """
    Decorator form of `wrap`.

    Usage::

        @memoize(TTLStore, {"max_age": 60}, mode=CallMode.ASYNC)
        async def fetch_profile(user_id: str) -> dict: ...
    """

    def decorator(
        func: Callable[..., Awaitable[Any]] | Callable[..., Any],
    ) -> CachedFunction[Any] | AsyncCachedFunction[Any]:
        return wrap(store, func, resolver, options, mode=mode)

    return decorator
