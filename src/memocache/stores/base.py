"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: stores/base.py.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Protocol, TypeVar, runtime_checkable

from ..config import CacheOptions

T = TypeVar("T")


@runtime_checkable
class CacheStore(Protocol[T]):
    """
    Minimal key-value contract every memoization backend implements.

    Reads of a missing key return `None` rather than raising. None of the
    operations report errors.
    """

    def has(self, key: Hashable) -> bool:
        """Return True iff an unexpired entry exists for `key`."""
        ...

    def get(self, key: Hashable) -> T | None:
        """Return the stored value, or `None` when absent."""
        ...

    def set(self, key: Hashable, value: T) -> None:
        """Insert or replace the entry for `key`, restarting its expiry clock."""
        ...

    def delete(self, key: Hashable) -> None:
        """Remove the entry for `key` and release its expiry resources."""
        ...

    def clear(self) -> None:
        """Remove every entry and release every expiry resource."""
        ...

    def stop(self) -> None:
        """Release all resources held by the store."""
        ...


StoreFactory = Callable[[CacheOptions], CacheStore]
