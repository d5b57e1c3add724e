"""Property-write → vehicle command routing.

The host reports every change of a subscribed property.  Acknowledged
changes are device echoes written by the poll cycle and are ignored;
unacknowledged ones are user intent and are routed through a fixed table
keyed by the property path from its fourth segment on::

    bluelink.0.control.lock                          -> "lock"
    bluelink.0.vehicleStatus.battery.charge_limit_slow -> "battery.charge_limit_slow"

Command responses are logged only.  Their effect becomes visible as
acknowledged state with the next poll cycle.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pybluelink._redact import redact_for_log
from pybluelink.client import Vehicle
from pybluelink.exceptions import ChargeLimitError, UnknownCommandError
from pybluelink.models.climate import DEFAULT_CLIMATE, ClimateStartParams
from pybluelink.scheduler import PollScheduler
from pybluelink.state.charge_limits import ChargeLimitField, ChargeLimitState

_logger = logging.getLogger(__name__)

CommandHandler = Callable[[Any], Awaitable[None]]

# Host id layout: <adapter>.<instance>.<namespace>.<key>[.<sub>]
_COMMAND_KEY_OFFSET = 3


def command_key(path: str) -> str:
    """Return the routing key of a full property id (``""`` if too short)."""
    return ".".join(path.split(".")[_COMMAND_KEY_OFFSET:])


class CommandDispatcher:
    """Routes unacknowledged property writes to vehicle commands."""

    def __init__(
        self,
        vehicle: Vehicle,
        *,
        scheduler: PollScheduler | None = None,
        charge_limits: ChargeLimitState | None = None,
        climate: ClimateStartParams = DEFAULT_CLIMATE,
    ) -> None:
        self._vehicle = vehicle
        self._scheduler = scheduler
        self._charge_limits = charge_limits if charge_limits is not None else ChargeLimitState()
        self._climate = climate
        self._routes: dict[str, CommandHandler] = {
            "lock": self._lock,
            "unlock": self._unlock,
            "start": self._start_climate,
            "stop": self._stop_climate,
            "force_refresh": self._force_refresh,
            "charge": self._start_charge,
            "stop_charge": self._stop_charge,
            # the control property is named charge_stop
            "charge_stop": self._stop_charge,
            "battery.charge_limit_slow": functools.partial(self._set_charge_limit, ChargeLimitField.SLOW),
            "battery.charge_limit_fast": functools.partial(self._set_charge_limit, ChargeLimitField.FAST),
        }

    @property
    def charge_limits(self) -> ChargeLimitState:
        return self._charge_limits

    @property
    def routes(self) -> frozenset[str]:
        return frozenset(self._routes)

    def resolve(self, path: str) -> CommandHandler:
        """Return the handler for *path*.

        Raises
        ------
        UnknownCommandError
            When no command is routed for the path.
        """
        handler = self._routes.get(command_key(path))
        if handler is None:
            raise UnknownCommandError(f"No command for control found for: {path}", path=path)
        return handler

    async def dispatch(self, path: str, value: Any, ack: bool) -> None:
        """Handle one property change.  Never raises."""
        if ack:
            _logger.debug("Ignoring acknowledged change of %s", path)
            return

        _logger.debug("New event for %s: %r", path, value)
        try:
            handler = self.resolve(path)
        except UnknownCommandError as exc:
            _logger.error("%s", exc)
            return

        try:
            await handler(value)
        except ChargeLimitError as exc:
            _logger.error("Rejected %s=%r: %s", path, value, exc)
        except Exception as exc:
            _logger.error("Command for %s failed: %s", path, exc)
            _logger.debug("Command for %s failed", path, exc_info=True)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def _lock(self, _value: Any) -> None:
        _logger.info("Starting lock for vehicle")
        response = await self._vehicle.lock()
        _logger.info("Lock response: %s", redact_for_log(response))

    async def _unlock(self, _value: Any) -> None:
        _logger.info("Starting unlock for vehicle")
        response = await self._vehicle.unlock()
        _logger.info("Unlock response: %s", redact_for_log(response))

    async def _start_climate(self, _value: Any) -> None:
        _logger.info("Starting climate for vehicle")
        response = await self._vehicle.start(self._climate)
        _logger.debug("Climate start response: %s", redact_for_log(response))

    async def _stop_climate(self, _value: Any) -> None:
        _logger.info("Stopping climate for vehicle")
        response = await self._vehicle.stop()
        _logger.debug("Climate stop response: %s", redact_for_log(response))

    async def _force_refresh(self, _value: Any) -> None:
        if self._scheduler is None:
            _logger.warning("Forced refresh requested but no poll scheduler is attached")
            return
        _logger.info("Forcing refresh")
        await self._scheduler.force_refresh()

    async def _start_charge(self, _value: Any) -> None:
        _logger.info("Start charging")
        response = await self._vehicle.start_charge()
        _logger.debug("Start charge response: %s", redact_for_log(response))

    async def _stop_charge(self, _value: Any) -> None:
        _logger.info("Stop charging")
        response = await self._vehicle.stop_charge()
        _logger.debug("Stop charge response: %s", redact_for_log(response))

    async def _set_charge_limit(self, field: ChargeLimitField, value: Any) -> None:
        # Raises ChargeLimitError before any API call; the cell is only
        # modified for a valid request.
        request = self._charge_limits.merge(field, value)
        _logger.info("Set new charging options (%s=%d): slow=%d fast=%d", field, value, request.slow, request.fast)
        response = await self._vehicle.set_charge_targets(request)
        _logger.debug("Charge targets response: %s", redact_for_log(response))
