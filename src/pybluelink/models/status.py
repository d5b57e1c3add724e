"""Vehicle status payload model.

Models the parsed ``fullStatus`` payload shared by both brands.  Which
sub-records are present signals the vehicle's capability class:

* ``vehicleStatus.evStatus``: electric or plug-in hybrid drivetrain
  (``gasModeRange`` is only reported by plug-in hybrids)
* ``vehicleStatus.battery``: 12V auxiliary battery (Kia only)
* ``vehicleLocation.coord``: location reporting supported

Capability sub-records are optional; once present, their nested fields
are required and a malformed record fails validation.
"""

from __future__ import annotations

import enum

from pydantic import Field

from pybluelink.models._base import BluelinkBaseModel, BluelinkEnum
from pybluelink.models.charge import TargetSoc

# ------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------


class VehicleKind(enum.StrEnum):
    """Capability class decoded from the payload shape."""

    COMBUSTION = "combustion"
    ELECTRIC = "electric"
    PLUGIN_HYBRID = "plugin_hybrid"


class PluginState(BluelinkEnum):
    """Charger connection reported as ``batteryPlugin``."""

    UNKNOWN = -1
    UNPLUGGED = 0
    FAST = 1
    PORTABLE = 2
    STATION = 3


# ------------------------------------------------------------------
# EV sub-records
# ------------------------------------------------------------------


class ValueWithUnit(BluelinkBaseModel):
    """A ``{value, unit}`` pair; the unit code is owned by the API."""

    value: int | float
    unit: int | None = None


class RangeByFuel(BluelinkBaseModel):
    ev_mode_range: ValueWithUnit
    gas_mode_range: ValueWithUnit | None = None
    """Only reported by plug-in hybrids."""
    total_available_range: ValueWithUnit


class DriveDistance(BluelinkBaseModel):
    range_by_fuel: RangeByFuel


class RemainTime(BluelinkBaseModel):
    atc: ValueWithUnit
    """Minutes to full charge at the current charger."""


class ReservChargeInfos(BluelinkBaseModel):
    target_soc_list: list[TargetSoc] | None = Field(default=None, alias="targetSOClist")


class EvStatus(BluelinkBaseModel):
    """Traction battery and range block of EV/PHEV payloads."""

    battery_status: int | float
    """Battery state of charge (0-100 %)."""
    battery_charge: bool
    """Whether the vehicle is actively charging."""
    battery_plugin: int | None = None
    """Raw charger connection code; see :attr:`plugin_state`."""
    drv_distance: list[DriveDistance] = Field(min_length=1)
    remain_time2: RemainTime = Field(alias="remainTime2")
    reserv_charge_infos: ReservChargeInfos | None = None

    @property
    def range_by_fuel(self) -> RangeByFuel:
        return self.drv_distance[0].range_by_fuel

    @property
    def plugin_state(self) -> PluginState:
        if self.battery_plugin is None:
            return PluginState.UNKNOWN
        return PluginState(self.battery_plugin)


# ------------------------------------------------------------------
# Other sub-records
# ------------------------------------------------------------------


class AuxBattery(BluelinkBaseModel):
    """12V auxiliary battery readings."""

    bat_soc: int | float | None = None
    bat_state: int | None = None


class Coordinates(BluelinkBaseModel):
    lat: float
    lon: float


class VehicleLocation(BluelinkBaseModel):
    coord: Coordinates | None = None
    speed: ValueWithUnit | None = None


class Odometer(BluelinkBaseModel):
    value: int | float | None = None
    unit: int | str | None = None


class VehicleStatus(BluelinkBaseModel):
    """The ``vehicleStatus`` block."""

    door_lock: bool | None = None
    trunk_open: bool | None = None
    hood_open: bool | None = None
    air_ctrl_on: bool | None = None
    ev_status: EvStatus | None = None
    battery: AuxBattery | None = None


class FullStatus(BluelinkBaseModel):
    """Parsed ``fullStatus`` payload.

    Numeric and boolean fields are ``None`` when the payload omits
    them.  All original data is available in the ``raw`` dict.
    """

    vehicle_status: VehicleStatus = Field(default_factory=VehicleStatus)
    vehicle_location: VehicleLocation | None = None
    odometer: Odometer | None = None

    @property
    def kind(self) -> VehicleKind:
        ev_status = self.vehicle_status.ev_status
        if ev_status is None:
            return VehicleKind.COMBUSTION
        if ev_status.range_by_fuel.gas_mode_range is not None:
            return VehicleKind.PLUGIN_HYBRID
        return VehicleKind.ELECTRIC

    @property
    def has_location(self) -> bool:
        return self.vehicle_location is not None and self.vehicle_location.coord is not None
