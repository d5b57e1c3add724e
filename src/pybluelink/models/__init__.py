"""Data models for status payloads, commands and normalized state."""

from pybluelink.models._base import BluelinkBaseModel, BluelinkEnum
from pybluelink.models.charge import (
    ChargeTargets,
    ChargeTargetsRequest,
    KnownChargeTargets,
    PlugType,
    TargetSoc,
    UnknownChargeTargets,
    decode_charge_targets,
    validate_charge_limit,
)
from pybluelink.models.climate import DEFAULT_CLIMATE, ClimateStartParams
from pybluelink.models.state import NormalizedState, PropertyScalar
from pybluelink.models.status import (
    AuxBattery,
    EvStatus,
    FullStatus,
    Odometer,
    PluginState,
    VehicleKind,
    VehicleLocation,
    VehicleStatus,
)

__all__ = [
    "AuxBattery",
    "BluelinkBaseModel",
    "BluelinkEnum",
    "ChargeTargets",
    "ChargeTargetsRequest",
    "ClimateStartParams",
    "DEFAULT_CLIMATE",
    "EvStatus",
    "FullStatus",
    "KnownChargeTargets",
    "NormalizedState",
    "Odometer",
    "PlugType",
    "PluginState",
    "PropertyScalar",
    "TargetSoc",
    "UnknownChargeTargets",
    "VehicleKind",
    "VehicleLocation",
    "VehicleStatus",
    "decode_charge_targets",
    "validate_charge_limit",
]
