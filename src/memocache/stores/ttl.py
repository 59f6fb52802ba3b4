"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Fixed time-to-live store with one expiry timer per entry.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..config import CacheOptions
from ..scheduling import ExpiryHandle, ThreadTimerScheduler, TimerScheduler

logger = logging.getLogger("memocache.stores.ttl")

T = TypeVar("T")


@dataclass(slots=True, eq=False)
class _Entry(Generic[T]):
    value: T
    timer: ExpiryHandle | None = None


class TTLStore(Generic[T]):
    """
    In-process store that drops each entry `max_age` seconds after it was set.

    Expiry is fixed: reads never extend an entry's lifetime. Setting a key
    cancels the previous timer for that key before scheduling a new one, so
    each key owns at most one pending timer. Without `max_age` entries live
    until deleted or cleared.

    `max_size` is accepted through options but not enforced.
    """

    def __init__(
        self,
        options: CacheOptions | Mapping[str, Any] | None = None,
        *,
        scheduler: TimerScheduler | None = None,
    ) -> None:
        self._options = CacheOptions.coerce(options)
        self._scheduler = scheduler or ThreadTimerScheduler()
        self._table: dict[Hashable, _Entry[T]] = {}
        self._lock = threading.RLock()
        if self._options.max_size is not None:
            logger.debug(
                "max_size=%d is accepted but not enforced by TTLStore",
                self._options.max_size,
            )

    @property
    def options(self) -> CacheOptions:
        return self._options

    def has(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._table

    def get(self, key: Hashable) -> T | None:
        with self._lock:
            entry = self._table.get(key)
            return entry.value if entry is not None else None

    def set(self, key: Hashable, value: T) -> None:
        with self._lock:
            self._drop(key)
            entry: _Entry[T] = _Entry(value=value)
            self._table[key] = entry
            if self._options.expires:
                entry.timer = self._scheduler.call_later(
                    float(self._options.max_age),  # type: ignore[arg-type]
                    lambda: self._expire(key, entry),
                )

    def delete(self, key: Hashable) -> None:
        with self._lock:
            self._drop(key)

    def clear(self) -> None:
        with self._lock:
            for entry in self._table.values():
                if entry.timer is not None:
                    entry.timer.cancel()
            count = len(self._table)
            self._table = {}
        if count:
            logger.debug("Cleared %d cache entries", count)

    def stop(self) -> None:
        self.clear()

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._table)

    def _drop(self, key: Hashable) -> None:
        entry = self._table.pop(key, None)
        if entry is not None and entry.timer is not None:
            entry.timer.cancel()

    def _expire(self, key: Hashable, entry: _Entry[T]) -> None:
        with self._lock:
            # A replaced, deleted or cleared entry must not be touched.
            if self._table.get(key) is not entry:
                return
            del self._table[key]
        logger.debug("Expired cache entry %r", key)
