"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Timer schedulers used by expiring stores.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from typing import Protocol


class ExpiryHandle(Protocol):
    """Cancellable handle returned by a scheduler."""

    def cancel(self) -> None: ...


class TimerScheduler(Protocol):
    """Schedules a zero-argument callback to run once after `delay` seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ExpiryHandle: ...


class ThreadTimerScheduler:
    """
    Scheduler backed by one daemon `threading.Timer` per call.

    Works without an event loop. Timers are daemon threads, so pending
    expirations never keep the interpreter alive.

    Each pending expiry holds one sleeping OS thread, so a store with 10k
    live entries holds 10k threads. Stores with many expiring entries inside
    an asyncio application should use `AsyncioTimerScheduler` instead.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> ExpiryHandle:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioTimerScheduler:
    """
    Scheduler backed by `loop.call_later`.

    Uses the loop given at construction, or the running loop at scheduling
    time. Scheduling outside a running loop without an explicit loop raises
    `RuntimeError`.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> ExpiryHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
