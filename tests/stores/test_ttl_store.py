from __future__ import annotations

import asyncio
import time

from memocache import (
    AsyncioTimerScheduler,
    CacheOptions,
    CacheStore,
    ThreadTimerScheduler,
    TTLStore,
)


class _ManualHandle:
    def __init__(self, delay: float, callback) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class _ManualScheduler:
    def __init__(self) -> None:
        self.handles: list[_ManualHandle] = []

    def call_later(self, delay: float, callback) -> _ManualHandle:
        handle = _ManualHandle(delay, callback)
        self.handles.append(handle)
        return handle

    def fire_pending(self) -> None:
        for handle in list(self.handles):
            if not handle.cancelled:
                handle.callback()


def test_ttl_store_satisfies_store_contract():
    assert isinstance(TTLStore(), CacheStore)


def test_set_then_get_without_max_age_schedules_nothing():
    scheduler = _ManualScheduler()
    store = TTLStore(scheduler=scheduler)

    store.set("a", 42)

    assert store.has("a")
    assert store.get("a") == 42
    assert "a" in store
    assert len(store) == 1
    assert scheduler.handles == []


def test_missing_key_reads_return_none():
    store = TTLStore()
    assert store.has("missing") is False
    assert store.get("missing") is None


def test_expiry_removes_entry_even_if_never_read():
    scheduler = _ManualScheduler()
    store = TTLStore({"max_age": 5}, scheduler=scheduler)

    store.set("a", 1)
    assert [h.delay for h in scheduler.handles] == [5.0]

    scheduler.fire_pending()
    assert store.has("a") is False
    assert store.get("a") is None


def test_reset_cancels_previous_timer_and_keeps_new_value():
    scheduler = _ManualScheduler()
    store = TTLStore(CacheOptions(max_age=5), scheduler=scheduler)

    store.set("a", 1)
    first = scheduler.handles[0]
    store.set("a", 2)

    assert first.cancelled is True
    assert len(scheduler.handles) == 2
    assert scheduler.handles[1].cancelled is False

    # A timer that already fired for the replaced entry must not evict the new one.
    first.callback()
    assert store.get("a") == 2


def test_reads_do_not_extend_lifetime():
    scheduler = _ManualScheduler()
    store = TTLStore({"max_age": 1}, scheduler=scheduler)

    store.set("a", 1)
    for _ in range(3):
        assert store.has("a")
        assert store.get("a") == 1

    assert len(scheduler.handles) == 1


def test_delete_cancels_timer_and_is_idempotent():
    scheduler = _ManualScheduler()
    store = TTLStore({"max_age": 1}, scheduler=scheduler)

    store.set("a", 1)
    store.delete("a")
    store.delete("a")
    store.delete("never-set")

    assert store.has("a") is False
    assert scheduler.handles[0].cancelled is True


def test_clear_cancels_every_timer_and_store_is_reusable():
    scheduler = _ManualScheduler()
    store = TTLStore({"max_age": 1}, scheduler=scheduler)

    store.set("a", 1)
    store.set("b", 2)
    stale = list(scheduler.handles)

    store.clear()
    store.clear()

    assert len(store) == 0
    assert all(h.cancelled for h in stale)

    store.set("a", 3)
    for handle in stale:
        handle.callback()
    assert store.get("a") == 3


def test_stop_is_idempotent_and_empties_store():
    scheduler = _ManualScheduler()
    store = TTLStore({"max_age": 1}, scheduler=scheduler)
    store.set("a", 1)

    store.stop()
    store.stop()

    assert len(store) == 0
    assert scheduler.handles[0].cancelled is True


def test_zero_max_age_disables_expiry():
    scheduler = _ManualScheduler()
    store = TTLStore({"max_age": 0}, scheduler=scheduler)
    store.set("a", 1)
    assert scheduler.handles == []


def test_max_size_is_accepted_but_not_enforced():
    store = TTLStore({"maxSize": 1})
    store.set("a", 1)
    store.set("b", 2)
    store.set("c", 3)

    assert store.options.max_size == 1
    assert len(store) == 3


def test_thread_timer_expires_entry_after_max_age():
    store = TTLStore({"maxAge": 1})
    try:
        store.set("a", 42)
        assert store.has("a") is True
        time.sleep(1.1)
        assert store.has("a") is False
    finally:
        store.stop()


def test_stopped_timer_never_evicts_a_later_entry():
    store = TTLStore({"max_age": 0.4})
    try:
        store.set("a", 1)
        time.sleep(0.2)
        store.stop()
        store.set("a", 2)
        time.sleep(0.3)
        assert store.get("a") == 2
    finally:
        store.stop()


def test_asyncio_scheduler_expires_entry_on_event_loop():
    async def scenario() -> None:
        store = TTLStore({"max_age": 0.05}, scheduler=AsyncioTimerScheduler())
        store.set("a", 1)
        assert store.has("a")
        await asyncio.sleep(0.15)
        assert store.has("a") is False

    asyncio.run(scenario())


def test_thread_scheduler_uses_cancellable_daemon_timers():
    fired: list[bool] = []
    handle = ThreadTimerScheduler().call_later(10, lambda: fired.append(True))

    assert handle.daemon is True
    handle.cancel()
    handle.join(timeout=1)

    assert handle.is_alive() is False
    assert fired == []
