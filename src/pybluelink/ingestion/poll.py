"""Status poll cycle.

One cycle fetches a fresh status payload, normalizes it, updates the
cached charge limits and writes every produced property with
``ack=True``.  Scheduling lives in :mod:`pybluelink.scheduler`.
"""

from __future__ import annotations

import logging

from pybluelink._redact import redact_for_log
from pybluelink.client import Vehicle
from pybluelink.exceptions import BluelinkNormalizationError
from pybluelink.ingestion.normalize import normalize_status
from pybluelink.models.charge import KnownChargeTargets, UnknownChargeTargets
from pybluelink.models.state import NormalizedState
from pybluelink.state.charge_limits import ChargeLimitState
from pybluelink.state.store import PropertyStore

_logger = logging.getLogger(__name__)


async def poll_vehicle_status(
    *,
    vehicle: Vehicle,
    store: PropertyStore,
    charge_limits: ChargeLimitState,
) -> NormalizedState | None:
    """Run one best-effort poll cycle.

    Returns the normalized state that was written, or ``None`` when the
    fetch or the normalization failed.  Failures are logged and never
    retried here; stale properties stay as they are until the next cycle.
    """
    _logger.info("Reading new status from API")
    try:
        payload = await vehicle.full_status(refresh=True, parsed=True)
    except Exception as exc:
        _logger.error("Error on API request full_status: %s", exc)
        _logger.debug("full_status failed", exc_info=True)
        return None

    _logger.debug("Status payload: %s", redact_for_log(payload))

    try:
        state, targets = normalize_status(payload)
    except BluelinkNormalizationError as exc:
        _logger.error("Could not normalize status payload: %s", exc)
        _logger.debug("Normalization failed", exc_info=True)
        return None

    if isinstance(targets, KnownChargeTargets):
        charge_limits.apply_device_targets(targets)
    elif isinstance(targets, UnknownChargeTargets):
        _logger.warning(
            "targetSOClist has %d entries instead of 2; charge limits left unchanged",
            len(targets.entries),
        )

    _logger.info("Set new status (%s, %d properties)", state.kind, len(state))
    for key, value in state.items():
        await store.write(key, value, ack=True)
    return state
