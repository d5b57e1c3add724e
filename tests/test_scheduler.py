from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from pybluelink._constants import poll_interval_ms
from pybluelink.ingestion.poll import poll_vehicle_status
from pybluelink.scheduler import PollScheduler, SchedulerState
from pybluelink.state.charge_limits import ChargeLimitState
from pybluelink.state.store import MemoryPropertyStore


@dataclass
class _FakeHandle:
    delay: float
    callback: Callable[..., Any]
    cancelled: int = 0

    def cancel(self) -> None:
        self.cancelled += 1


@dataclass
class _FakeTimer:
    armed: list[_FakeHandle] = field(default_factory=list)

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> _FakeHandle:
        handle = _FakeHandle(delay=delay, callback=callback)
        self.armed.append(handle)
        return handle


@dataclass
class _Poll:
    calls: int = 0
    error: Exception | None = None

    async def __call__(self) -> None:
        self.calls += 1
        if self.error is not None:
            raise self.error


def test_poll_interval_from_budget() -> None:
    assert poll_interval_ms(100) == 864_000
    assert poll_interval_ms(1) == 86_400_000
    assert poll_interval_ms(1440) == 60_000


def test_poll_interval_rejects_zero_budget() -> None:
    with pytest.raises(ValueError):
        poll_interval_ms(0)


@pytest.mark.asyncio
async def test_start_arms_one_timer_with_interval() -> None:
    timer = _FakeTimer()
    scheduler = PollScheduler(_Poll(), request_budget=100, timer=timer)

    scheduler.start()
    scheduler.start()

    assert scheduler.state == SchedulerState.WAITING
    assert len(timer.armed) == 1
    assert timer.armed[0].delay == 864.0


@pytest.mark.asyncio
async def test_force_refresh_cancels_once_and_rearms() -> None:
    timer = _FakeTimer()
    poll = _Poll()
    scheduler = PollScheduler(poll, request_budget=100, timer=timer)
    scheduler.start()

    await scheduler.force_refresh()

    assert timer.armed[0].cancelled == 1
    assert poll.calls == 1
    assert len(timer.armed) == 2
    assert timer.armed[1].delay == 864.0
    assert timer.armed[1].cancelled == 0
    assert scheduler.state == SchedulerState.WAITING


@pytest.mark.asyncio
async def test_timer_fire_runs_cycle_and_rearms() -> None:
    timer = _FakeTimer()
    poll = _Poll()
    scheduler = PollScheduler(poll, request_budget=1, timer=timer)
    scheduler.start()

    timer.armed[0].callback()
    await scheduler._cycle  # noqa: SLF001

    assert poll.calls == 1
    assert len(timer.armed) == 2
    assert timer.armed[1].delay == 86_400.0


@pytest.mark.asyncio
async def test_failing_poll_still_rearms() -> None:
    timer = _FakeTimer()
    poll = _Poll(error=RuntimeError("network down"))
    scheduler = PollScheduler(poll, request_budget=100, timer=timer)
    scheduler.start()

    await scheduler.force_refresh()

    assert poll.calls == 1
    assert len(timer.armed) == 2
    assert timer.armed[1].delay == 864.0
    assert scheduler.state == SchedulerState.WAITING


@pytest.mark.asyncio
async def test_force_refresh_before_start_is_ignored() -> None:
    timer = _FakeTimer()
    poll = _Poll()
    scheduler = PollScheduler(poll, timer=timer)

    await scheduler.force_refresh()

    assert poll.calls == 0
    assert timer.armed == []


@pytest.mark.asyncio
async def test_force_refresh_during_poll_is_coalesced() -> None:
    timer = _FakeTimer()
    calls = 0
    scheduler: PollScheduler

    async def poll() -> None:
        nonlocal calls
        calls += 1
        await scheduler.force_refresh()

    scheduler = PollScheduler(poll, timer=timer)
    scheduler.start()

    await scheduler.force_refresh()

    assert calls == 1
    assert len(timer.armed) == 2


def test_stop_before_start_is_safe() -> None:
    scheduler = PollScheduler(_Poll(), timer=_FakeTimer())

    scheduler.stop()

    assert scheduler.state == SchedulerState.IDLE


@pytest.mark.asyncio
async def test_stop_cancels_pending_timer() -> None:
    timer = _FakeTimer()
    scheduler = PollScheduler(_Poll(), timer=timer)
    scheduler.start()

    scheduler.stop()

    assert timer.armed[0].cancelled == 1
    assert scheduler.state == SchedulerState.IDLE


@pytest.mark.asyncio
async def test_stop_during_poll_prevents_rearm() -> None:
    timer = _FakeTimer()
    scheduler: PollScheduler

    async def poll() -> None:
        scheduler.stop()

    scheduler = PollScheduler(poll, timer=timer)
    scheduler.start()

    await scheduler.force_refresh()

    assert len(timer.armed) == 1
    assert scheduler.state == SchedulerState.IDLE


def _live(timer: _FakeTimer, fired: set[int]) -> list[_FakeHandle]:
    return [h for i, h in enumerate(timer.armed) if h.cancelled == 0 and i not in fired]


@pytest.mark.asyncio
async def test_force_refresh_after_timer_fire_is_coalesced() -> None:
    timer = _FakeTimer()
    poll = _Poll()
    scheduler = PollScheduler(poll, request_budget=100, timer=timer)
    scheduler.start()

    timer.armed[0].callback()
    assert scheduler.state == SchedulerState.POLLING
    await scheduler.force_refresh()
    await scheduler._cycle  # noqa: SLF001

    assert poll.calls == 1
    assert len(_live(timer, fired={0})) == 1

    scheduler.stop()

    assert _live(timer, fired={0}) == []
    assert scheduler.state == SchedulerState.IDLE


@pytest.mark.asyncio
async def test_stop_between_timer_fire_and_cycle_does_not_rearm() -> None:
    timer = _FakeTimer()
    poll = _Poll()
    scheduler = PollScheduler(poll, request_budget=100, timer=timer)
    scheduler.start()

    timer.armed[0].callback()
    scheduler.stop()
    await scheduler._cycle  # noqa: SLF001

    assert len(timer.armed) == 1
    assert scheduler.state == SchedulerState.IDLE


@pytest.mark.asyncio
async def test_late_timer_callback_after_stop_is_ignored() -> None:
    timer = _FakeTimer()
    poll = _Poll()
    scheduler = PollScheduler(poll, request_budget=100, timer=timer)
    scheduler.start()
    scheduler.stop()

    timer.armed[0].callback()

    assert poll.calls == 0
    assert len(timer.armed) == 1
    assert scheduler.state == SchedulerState.IDLE


@pytest.mark.asyncio
async def test_failing_fetch_under_scheduler_writes_nothing_and_rearms_once() -> None:
    @dataclass
    class _FailingVehicle:
        fetches: int = 0

        async def full_status(self, *, refresh: bool = True, parsed: bool = True) -> Any:
            self.fetches += 1
            raise ConnectionError("timeout")

    vehicle = _FailingVehicle()
    store = MemoryPropertyStore()
    timer = _FakeTimer()
    scheduler = PollScheduler(
        functools.partial(
            poll_vehicle_status,
            vehicle=vehicle,  # type: ignore[arg-type]
            store=store,
            charge_limits=ChargeLimitState(),
        ),
        request_budget=100,
        timer=timer,
    )
    scheduler.start()

    await scheduler.force_refresh()

    assert vehicle.fetches == 1
    assert store.snapshot() == {}
    live = _live(timer, fired=set())
    assert len(live) == 1
    assert live[0].delay == 864.0
    assert scheduler.state == SchedulerState.WAITING
