"""Bridge lifecycle.

:class:`BluelinkBridge` wires one vehicle into a host property tree:

1. validate configuration (missing VIN/username is fatal, no login)
2. log in through the client factory; the resolved vehicle list is the
   readiness signal, an exception the error signal (logged, no retry)
3. create the control and status properties, subscribe the writable ones
4. poll once immediately, then every ``1440 / budget`` minutes
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Sequence
from typing import Any

from pybluelink._redact import redact_for_log
from pybluelink.client import ClientFactory, Vehicle, build_client_options
from pybluelink.config import BluelinkConfig
from pybluelink.dispatcher import CommandDispatcher
from pybluelink.exceptions import BluelinkAuthenticationError, BluelinkConfigError
from pybluelink.ingestion.poll import poll_vehicle_status
from pybluelink.scheduler import PollScheduler, Timer
from pybluelink.state.charge_limits import ChargeLimitState
from pybluelink.state.properties import ensure_properties
from pybluelink.state.store import PropertyStore, PropertyValue

_logger = logging.getLogger(__name__)


class BluelinkBridge:
    """Mirror a single vehicle into a property store.

    Usage::

        async with BluelinkBridge(config, store, client_factory) as bridge:
            ...  # runs until the context exits
    """

    def __init__(
        self,
        config: BluelinkConfig,
        store: PropertyStore,
        client_factory: ClientFactory,
        *,
        timer: Timer | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._client_factory = client_factory
        self._timer = timer
        self._vehicle: Vehicle | None = None
        self._scheduler: PollScheduler | None = None
        self._dispatcher: CommandDispatcher | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BluelinkBridge:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self._dispatcher is not None

    @property
    def scheduler(self) -> PollScheduler | None:
        return self._scheduler

    @property
    def dispatcher(self) -> CommandDispatcher | None:
        return self._dispatcher

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> bool:
        """Validate, log in and start polling.

        Returns ``True`` once the vehicle is mirrored.  Every failure is
        logged and leaves the bridge idle.
        """
        budget = self._config.request_budget
        try:
            self._config.validate()
        except BluelinkConfigError as exc:
            _logger.error("%s", exc)
            return False

        _logger.info("Login to api")
        options = build_client_options(self._config)
        _logger.debug("Client options: %s", redact_for_log(options))
        try:
            client = self._client_factory(options)
            vehicles = await client.login()
        except Exception as exc:
            self._on_error(exc)
            return False

        return await self._on_ready(vehicles, budget)

    def stop(self) -> None:
        """Cancel the pending poll and stop routing commands."""
        if self._scheduler is not None:
            self._scheduler.stop()
        self._store.set_change_handler(None)
        _logger.info("Bridge cleaned up everything")

    # ------------------------------------------------------------------
    # Client signals
    # ------------------------------------------------------------------

    def _on_error(self, exc: Exception) -> None:
        if isinstance(exc, BluelinkAuthenticationError):
            _logger.error("Error on API login: %s", exc)
        else:
            _logger.error("Error in login: %s", exc)
        _logger.debug("Login failed", exc_info=exc)

    async def _on_ready(self, vehicles: Sequence[Vehicle], budget: int) -> bool:
        if not vehicles:
            _logger.error("No vehicle found for VIN %s", self._config.vin)
            return False
        _logger.info("Vehicles found")
        # The client resolves vehicles by the configured VIN.
        vehicle = vehicles[0]

        charge_limits = ChargeLimitState()
        scheduler = PollScheduler(
            functools.partial(
                poll_vehicle_status,
                vehicle=vehicle,
                store=self._store,
                charge_limits=charge_limits,
            ),
            request_budget=budget,
            timer=self._timer,
        )
        dispatcher = CommandDispatcher(vehicle, scheduler=scheduler, charge_limits=charge_limits)

        self._vehicle = vehicle
        self._scheduler = scheduler
        self._dispatcher = dispatcher

        await ensure_properties(self._store)
        self._store.set_change_handler(self._on_state_change)

        scheduler.start()
        await scheduler.force_refresh()
        return True

    async def _on_state_change(self, full_id: str, state: PropertyValue) -> None:
        dispatcher = self._dispatcher
        if dispatcher is None:
            return
        await dispatcher.dispatch(full_id, state.val, state.ack)
