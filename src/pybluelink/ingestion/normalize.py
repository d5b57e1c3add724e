"""Status normalization.

Maps a parsed ``fullStatus`` payload onto the brand-agnostic property set
mirrored into the host's property tree.  Pure: no I/O, no logging, no
shared state.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pybluelink.exceptions import BluelinkNormalizationError
from pybluelink.models.charge import ChargeTargets, KnownChargeTargets, decode_charge_targets
from pybluelink.models.state import NormalizedState, PropertyScalar
from pybluelink.models.status import FullStatus


def parse_full_status(payload: Mapping[str, Any] | FullStatus) -> FullStatus:
    """Validate a raw payload into a :class:`FullStatus`.

    Raises
    ------
    BluelinkNormalizationError
        When the payload is not a mapping or a present capability
        sub-record is malformed.
    """
    if isinstance(payload, FullStatus):
        return payload
    if not isinstance(payload, Mapping):
        raise BluelinkNormalizationError(f"Status payload must be a mapping, got {type(payload).__name__}")
    try:
        return FullStatus.model_validate(dict(payload))
    except ValidationError as exc:
        raise BluelinkNormalizationError(f"Malformed status payload: {exc.error_count()} invalid field(s)") from exc


def _put(properties: dict[str, PropertyScalar], key: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, int) and not isinstance(value, bool):
        # IntEnum members are stored as plain ints.
        value = int(value)
    properties[key] = value


def normalize_status(
    payload: Mapping[str, Any] | FullStatus,
) -> tuple[NormalizedState, ChargeTargets | None]:
    """Map a status payload to properties and charge targets.

    Returns the normalized state and the decoded charge targets, which are
    ``None`` when the vehicle reports no ``targetSOClist``.  Charge-limit
    properties are only emitted for :class:`KnownChargeTargets`.
    """
    status = parse_full_status(payload)
    properties: dict[str, PropertyScalar] = {}

    vehicle = status.vehicle_status
    _put(properties, "vehicleStatus.doorLock", vehicle.door_lock)
    _put(properties, "vehicleStatus.trunkOpen", vehicle.trunk_open)
    _put(properties, "vehicleStatus.hoodOpen", vehicle.hood_open)
    _put(properties, "vehicleStatus.airCtrlOn", vehicle.air_ctrl_on)

    targets: ChargeTargets | None = None
    ev = vehicle.ev_status
    if ev is not None:
        infos = ev.reserv_charge_infos
        if infos is not None and infos.target_soc_list is not None:
            targets = decode_charge_targets(infos.target_soc_list)
            if isinstance(targets, KnownChargeTargets):
                _put(properties, "vehicleStatus.battery.charge_limit_slow", targets.slow)
                _put(properties, "vehicleStatus.battery.charge_limit_fast", targets.fast)

        ranges = ev.range_by_fuel
        _put(properties, "vehicleStatus.dte", ranges.total_available_range.value)
        _put(properties, "vehicleStatus.evModeRange", ranges.ev_mode_range.value)
        if ranges.gas_mode_range is not None:
            _put(properties, "vehicleStatus.gasModeRange", ranges.gas_mode_range.value)

        _put(properties, "vehicleStatus.battery.soc", ev.battery_status)
        _put(properties, "vehicleStatus.battery.charge", ev.battery_charge)
        _put(properties, "vehicleStatus.battery.plugin", ev.battery_plugin)
        _put(properties, "vehicleStatus.battery.minutes_to_charged", ev.remain_time2.atc.value)

    aux = vehicle.battery
    if aux is not None:
        _put(properties, "vehicleStatus.battery.soc-12V", aux.bat_soc)
        _put(properties, "vehicleStatus.battery.state-12V", aux.bat_state)

    location = status.vehicle_location
    if location is not None and location.coord is not None:
        _put(properties, "vehicleLocation.lat", location.coord.lat)
        _put(properties, "vehicleLocation.lon", location.coord.lon)
        if location.speed is not None:
            _put(properties, "vehicleLocation.speed", location.speed.value)

    odometer = status.odometer
    if odometer is not None:
        _put(properties, "odometer.value", odometer.value)
        _put(properties, "odometer.unit", odometer.unit)

    return NormalizedState(kind=status.kind, properties=properties), targets
