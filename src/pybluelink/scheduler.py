"""Budgeted status polling.

:class:`PollScheduler` runs one poll cycle every ``1440 / budget`` minutes
on the asyncio event loop, and lets callers force an immediate cycle.

States::

    IDLE --start()--> WAITING --timer / force_refresh()--> POLLING --done--> WAITING
      ^                                                                        |
      +-------------------------------- stop() --------------------------------+

At most one timer is pending.  Only that timer is cancellable; an
in-flight cycle always runs to completion.  Forced cycles do not consume
budget: the next regular interval is measured from the end of the forced
cycle, so frequent forced refreshes can exceed the nominal daily budget.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from pybluelink._constants import DEFAULT_REQUEST_BUDGET, poll_interval_ms

_logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Timer(Protocol):
    """Anything with ``call_later``; the running event loop by default."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        ...


class SchedulerState(enum.StrEnum):
    IDLE = "idle"
    WAITING = "waiting"
    POLLING = "polling"


class PollScheduler:
    """Repeating poll cycle with forced-refresh preemption.

    Usage::

        scheduler = PollScheduler(cycle, request_budget=100)
        scheduler.start()
        await scheduler.force_refresh()  # poll now, re-arm afterwards
        scheduler.stop()
    """

    def __init__(
        self,
        poll: Callable[[], Awaitable[object]],
        *,
        request_budget: int = DEFAULT_REQUEST_BUDGET,
        timer: Timer | None = None,
    ) -> None:
        self._poll = poll
        self._interval_ms = poll_interval_ms(request_budget)
        self._timer = timer
        self._handle: TimerHandle | None = None
        self._cycle: asyncio.Task[None] | None = None
        self._state = SchedulerState.IDLE

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    @property
    def interval(self) -> float:
        """Polling interval in seconds."""
        return self._interval_ms / 1000.0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Arm the first timer.  No-op unless idle."""
        if self._state != SchedulerState.IDLE:
            _logger.debug("Scheduler already started (%s)", self._state)
            return
        if self._timer is None:
            self._timer = asyncio.get_running_loop()
        self._arm()

    async def force_refresh(self) -> None:
        """Cancel the pending timer and poll immediately.

        While a cycle is already running the request is coalesced into it.
        Before :meth:`start` (or after :meth:`stop`) it is ignored.
        """
        if self._state == SchedulerState.IDLE:
            _logger.debug("Forced refresh ignored; scheduler is not running")
            return
        if self._state == SchedulerState.POLLING:
            _logger.debug("Forced refresh coalesced into the running poll cycle")
            return
        self._cancel_timer()
        self._state = SchedulerState.POLLING
        await self._run_cycle()

    def stop(self) -> None:
        """Cancel the pending timer.  Safe from any state, including before start."""
        self._cancel_timer()
        self._state = SchedulerState.IDLE

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _arm(self) -> None:
        assert self._timer is not None  # noqa: S101
        # At most one timer is pending at any time.
        self._cancel_timer()
        self._handle = self._timer.call_later(self.interval, self._on_timer)
        self._state = SchedulerState.WAITING
        _logger.debug("Next status poll in %.0f s", self.interval)

    def _cancel_timer(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is not None:
            handle.cancel()

    def _on_timer(self) -> None:
        self._handle = None
        if self._state != SchedulerState.WAITING:
            _logger.debug("Timer fired while %s; ignored", self._state)
            return
        # A forced refresh queued before the task starts is coalesced.
        self._state = SchedulerState.POLLING
        self._cycle = asyncio.get_running_loop().create_task(self._run_cycle())

    async def _run_cycle(self) -> None:
        try:
            await self._poll()
        except Exception as exc:
            _logger.error("Poll cycle failed: %s", exc)
            _logger.debug("Poll cycle failed", exc_info=True)

        # stop() during the cycle leaves the scheduler idle.
        if self._state == SchedulerState.POLLING:
            self._arm()
