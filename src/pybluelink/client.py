"""Boundary of the remote vehicle API.

pybluelink does not own the telematics transport or the login handshake.
It consumes any client object matching :class:`VehicleClient`; the
structural protocols here keep the bridge testable with plain doubles.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol, TypedDict

from pybluelink.config import BluelinkConfig
from pybluelink.models.charge import ChargeTargetsRequest
from pybluelink.models.climate import ClimateStartParams


class ClientOptions(TypedDict):
    """Options handed to the client factory."""

    username: str
    password: str
    pin: str | None
    brand: str
    vin: str
    region: str


class Vehicle(Protocol):
    """Handle of the resolved vehicle.

    Command methods return the raw API response; the bridge only logs it.
    """

    async def full_status(self, *, refresh: bool = True, parsed: bool = True) -> Mapping[str, Any]:
        ...

    async def lock(self) -> Any:
        ...

    async def unlock(self) -> Any:
        ...

    async def start(self, params: ClimateStartParams) -> Any:
        ...

    async def stop(self) -> Any:
        ...

    async def start_charge(self) -> Any:
        ...

    async def stop_charge(self) -> Any:
        ...

    async def set_charge_targets(self, targets: ChargeTargetsRequest) -> Any:
        ...


class VehicleClient(Protocol):
    """Logged-in access to the account's vehicles."""

    async def login(self) -> Sequence[Vehicle]:
        """Authenticate and resolve the vehicles for the configured VIN.

        Returning is the readiness signal; raising is the error signal.
        """
        ...


ClientFactory = Callable[[ClientOptions], VehicleClient]


def build_client_options(config: BluelinkConfig) -> ClientOptions:
    """Map bridge configuration onto client options."""
    return ClientOptions(
        username=config.username,
        password=config.password,
        pin=config.pin,
        brand=config.brand.value,
        vin=config.vin,
        region=config.region,
    )
