"""pybluelink - Async bridge between Hyundai Bluelink / Kia UVO vehicles and a property tree."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pybluelink")
except PackageNotFoundError:
    __version__ = "0+local"
from pybluelink.bridge import BluelinkBridge
from pybluelink.client import ClientFactory, ClientOptions, Vehicle, VehicleClient
from pybluelink.config import BluelinkConfig, Brand
from pybluelink.dispatcher import CommandDispatcher
from pybluelink.exceptions import (
    BluelinkApiError,
    BluelinkAuthenticationError,
    BluelinkConfigError,
    BluelinkError,
    BluelinkNormalizationError,
    ChargeLimitError,
    UnknownCommandError,
)
from pybluelink.ingestion.normalize import normalize_status
from pybluelink.models import (
    ChargeTargetsRequest,
    ClimateStartParams,
    FullStatus,
    KnownChargeTargets,
    NormalizedState,
    PlugType,
    PluginState,
    UnknownChargeTargets,
    VehicleKind,
)
from pybluelink.scheduler import PollScheduler, SchedulerState
from pybluelink.state.charge_limits import ChargeLimitState
from pybluelink.state.store import MemoryPropertyStore, PropertyStore

__all__ = [
    "__version__",
    "BluelinkApiError",
    "BluelinkAuthenticationError",
    "BluelinkBridge",
    "BluelinkConfig",
    "BluelinkConfigError",
    "BluelinkError",
    "BluelinkNormalizationError",
    "Brand",
    "ChargeLimitError",
    "ChargeLimitState",
    "ChargeTargetsRequest",
    "ClientFactory",
    "ClientOptions",
    "ClimateStartParams",
    "CommandDispatcher",
    "FullStatus",
    "KnownChargeTargets",
    "MemoryPropertyStore",
    "NormalizedState",
    "PlugType",
    "PluginState",
    "PollScheduler",
    "PropertyStore",
    "SchedulerState",
    "UnknownChargeTargets",
    "UnknownCommandError",
    "Vehicle",
    "VehicleClient",
    "VehicleKind",
    "normalize_status",
]
