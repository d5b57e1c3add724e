from __future__ import annotations

from typing import Any

import pytest

from pybluelink.exceptions import BluelinkNormalizationError
from pybluelink.ingestion.normalize import normalize_status, parse_full_status
from pybluelink.models.charge import KnownChargeTargets, UnknownChargeTargets
from pybluelink.models.status import PluginState, VehicleKind


def _ev_status(*, gas_range: float | None = None, targets: list[dict[str, int]] | None = None) -> dict[str, Any]:
    range_by_fuel: dict[str, Any] = {
        "evModeRange": {"value": 250, "unit": 1},
        "totalAvailableRange": {"value": 250 if gas_range is None else 250 + gas_range, "unit": 1},
    }
    if gas_range is not None:
        range_by_fuel["gasModeRange"] = {"value": gas_range, "unit": 1}
    ev: dict[str, Any] = {
        "batteryStatus": 80,
        "batteryCharge": False,
        "batteryPlugin": 1,
        "drvDistance": [{"rangeByFuel": range_by_fuel}],
        "remainTime2": {"atc": {"value": 120, "unit": 1}},
    }
    if targets is not None:
        ev["reservChargeInfos"] = {"targetSOClist": targets}
    return ev


_TARGETS = [
    {"plugType": 1, "targetSOClevel": 60},
    {"plugType": 0, "targetSOClevel": 80},
]


def test_ev_payload_maps_battery_and_ranges() -> None:
    payload = {
        "vehicleStatus": {
            "doorLock": True,
            "trunkOpen": False,
            "hoodOpen": False,
            "airCtrlOn": False,
            "evStatus": _ev_status(targets=_TARGETS),
        },
    }

    state, targets = normalize_status(payload)

    assert state.kind == VehicleKind.ELECTRIC
    assert state["vehicleStatus.doorLock"] is True
    assert state["vehicleStatus.trunkOpen"] is False
    assert state["vehicleStatus.dte"] == 250
    assert state["vehicleStatus.evModeRange"] == 250
    assert "vehicleStatus.gasModeRange" not in state
    assert state["vehicleStatus.battery.soc"] == 80
    assert state["vehicleStatus.battery.charge"] is False
    assert state["vehicleStatus.battery.plugin"] == 1
    assert type(state["vehicleStatus.battery.plugin"]) is int
    assert state["vehicleStatus.battery.minutes_to_charged"] == 120
    assert state["vehicleStatus.battery.charge_limit_slow"] == 60
    assert state["vehicleStatus.battery.charge_limit_fast"] == 80
    assert targets == KnownChargeTargets(slow=60, fast=80)


def test_phev_payload_adds_gas_range() -> None:
    payload = {"vehicleStatus": {"evStatus": _ev_status(gas_range=400)}}

    state, targets = normalize_status(payload)

    assert state.kind == VehicleKind.PLUGIN_HYBRID
    assert state["vehicleStatus.gasModeRange"] == 400
    assert state["vehicleStatus.dte"] == 650
    assert targets is None
    assert "vehicleStatus.battery.charge_limit_slow" not in state


def test_combustion_payload_has_no_ev_keys() -> None:
    payload = {
        "vehicleStatus": {"doorLock": False, "trunkOpen": False, "hoodOpen": True, "airCtrlOn": True},
        "odometer": {"value": 12345.6, "unit": 1},
    }

    state, targets = normalize_status(payload)

    assert state.kind == VehicleKind.COMBUSTION
    assert targets is None
    assert state["vehicleStatus.hoodOpen"] is True
    assert state["odometer.value"] == 12345.6
    assert state["odometer.unit"] == 1
    assert not any(key.startswith("vehicleStatus.battery.") for key in state.keys())
    assert "vehicleStatus.dte" not in state


def test_aux_battery_is_mapped_when_present() -> None:
    payload = {"vehicleStatus": {"battery": {"batSoc": 90, "batState": 0}}}

    state, _ = normalize_status(payload)

    assert state["vehicleStatus.battery.soc-12V"] == 90
    assert state["vehicleStatus.battery.state-12V"] == 0


def test_location_is_mapped_only_with_coordinates() -> None:
    with_coord = {
        "vehicleStatus": {},
        "vehicleLocation": {"coord": {"lat": 52.52, "lon": 13.405, "alt": 34}, "speed": {"value": 0, "unit": 0}},
    }
    without_coord = {"vehicleStatus": {}, "vehicleLocation": {"speed": {"value": 0, "unit": 0}}}

    state, _ = normalize_status(with_coord)
    bare, _ = normalize_status(without_coord)

    assert state["vehicleLocation.lat"] == 52.52
    assert state["vehicleLocation.lon"] == 13.405
    assert state["vehicleLocation.speed"] == 0
    assert not any(key.startswith("vehicleLocation.") for key in bare.keys())


def test_missing_scalars_are_skipped() -> None:
    state, _ = normalize_status({"vehicleStatus": {"doorLock": None, "trunkOpen": True}})

    assert "vehicleStatus.doorLock" not in state
    assert state["vehicleStatus.trunkOpen"] is True


def test_unknown_target_list_emits_no_limits() -> None:
    payload = {"vehicleStatus": {"evStatus": _ev_status(targets=_TARGETS[:1])}}

    state, targets = normalize_status(payload)

    assert isinstance(targets, UnknownChargeTargets)
    assert len(targets.entries) == 1
    assert "vehicleStatus.battery.charge_limit_slow" not in state
    assert "vehicleStatus.battery.charge_limit_fast" not in state


def test_unmapped_plugin_value_is_mirrored_raw() -> None:
    ev = _ev_status()
    ev["batteryPlugin"] = 4

    state, _ = normalize_status({"vehicleStatus": {"evStatus": ev}})
    status = parse_full_status({"vehicleStatus": {"evStatus": ev}})

    assert state["vehicleStatus.battery.plugin"] == 4
    assert status.vehicle_status.ev_status is not None
    assert status.vehicle_status.ev_status.plugin_state == PluginState.UNKNOWN


def test_mapped_plugin_value_has_typed_state() -> None:
    status = parse_full_status({"vehicleStatus": {"evStatus": _ev_status()}})

    assert status.vehicle_status.ev_status is not None
    assert status.vehicle_status.ev_status.plugin_state == PluginState.FAST


def test_integer_readings_keep_their_type() -> None:
    ev = _ev_status()
    ev["batteryStatus"] = 55
    ev["remainTime2"] = {"atc": {"value": 37.5, "unit": 1}}

    state, _ = normalize_status({"vehicleStatus": {"evStatus": ev}, "odometer": {"value": 4200, "unit": 1}})

    assert type(state["vehicleStatus.battery.soc"]) is int
    assert type(state["vehicleStatus.dte"]) is int
    assert type(state["odometer.value"]) is int
    assert state["vehicleStatus.battery.minutes_to_charged"] == 37.5


def test_malformed_ev_status_raises() -> None:
    ev = _ev_status()
    ev["drvDistance"] = []

    with pytest.raises(BluelinkNormalizationError):
        normalize_status({"vehicleStatus": {"evStatus": ev}})


def test_non_mapping_payload_raises() -> None:
    with pytest.raises(BluelinkNormalizationError):
        normalize_status(["not", "a", "mapping"])  # type: ignore[arg-type]


def test_raw_payload_is_kept() -> None:
    payload = {"vehicleStatus": {"doorLock": True, "sideBackWindowHeat": 0}}

    status = parse_full_status(payload)

    assert status.vehicle_status.raw["sideBackWindowHeat"] == 0
