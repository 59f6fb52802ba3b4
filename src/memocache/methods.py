"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Explicit registration of cached methods for one object.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from .config import CacheOptions
from .errors import InvalidCacheArgumentError
from .memoize import AsyncCachedFunction, CachedFunction, CallMode, wrap
from .stores.base import StoreFactory

logger = logging.getLogger("memocache.methods")


def _first_argument(*args: Any, **kwargs: Any) -> Any:
    _ = kwargs
    return args[0] if args else None


class CachedMethods(Mapping[str, Callable[..., Any]]):
    """
    Read-only lookup of cached callables built by `bind_methods`.

    Each bound method is registered twice: under its own name (cached call)
    and under the prefixed name (`direct` refresh call). The source object
    is left untouched.
    """

    def __init__(
        self,
        wrappers: dict[str, CachedFunction[Any] | AsyncCachedFunction[Any]],
        prefix: str,
    ) -> None:
        self._wrappers = wrappers
        self._prefix = prefix
        self._callables: dict[str, Callable[..., Any]] = {}
        for name, cached in wrappers.items():
            self._callables[name] = cached
            self._callables[f"{prefix}{name}"] = cached.direct

    @property
    def prefix(self) -> str:
        return self._prefix

    def cached(self, name: str) -> CachedFunction[Any] | AsyncCachedFunction[Any]:
        """Return the wrapper unit (with `.cache` and `.func`) for `name`."""
        return self._wrappers[name]

    def stop(self) -> None:
        """Stop every store owned by the bound methods."""
        for cached in self._wrappers.values():
            cached.cache.stop()

    def __getitem__(self, name: str) -> Callable[..., Any]:
        return self._callables[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._callables)

    def __len__(self) -> int:
        return len(self._callables)


def bind_methods(
    store: str | StoreFactory | None,
    obj: object,
    methods: Mapping[str, CacheOptions | Mapping[str, Any] | None],
    prefix: str = "_",
    *,
    async_methods: Iterable[str] = (),
) -> CachedMethods:
    """
    Wrap the named methods of `obj`, each with its own store.

    Cached calls are keyed by the first positional argument. Methods listed
    in `async_methods` are wrapped as coroutine functions.

    Raises:
        InvalidCacheArgumentError: a named attribute is missing or not callable.
    """
    async_names = set(async_methods)
    unknown = async_names - set(methods)
    if unknown:
        raise InvalidCacheArgumentError(
            f"async_methods not listed in methods: {', '.join(sorted(unknown))}"
        )

    wrappers: dict[str, CachedFunction[Any] | AsyncCachedFunction[Any]] = {}
    for name, options in methods.items():
        method = getattr(obj, name, None)
        if method is None or not callable(method):
            raise InvalidCacheArgumentError(
                f"{type(obj).__name__}.{name} is not a callable method"
            )
        mode = CallMode.ASYNC if name in async_names else CallMode.SYNC
        wrappers[name] = wrap(store, method, _first_argument, options, mode=mode)
        logger.debug("Bound cached method %s.%s (%s)", type(obj).__name__, name, mode.value)
    return CachedMethods(wrappers, prefix)
