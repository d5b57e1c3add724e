"""Normalized, brand-agnostic vehicle state."""

from __future__ import annotations

from collections.abc import ItemsView, KeysView
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pybluelink.models.status import VehicleKind

PropertyScalar = bool | int | float | str


class NormalizedState(BaseModel):
    """Flat property map produced from one status payload.

    Keys are property paths relative to the bridge namespace (e.g.
    ``"vehicleStatus.battery.soc"``).  A key is absent when the vehicle
    lacks the capability or the payload omitted the reading.
    """

    model_config = ConfigDict(frozen=True)

    kind: VehicleKind
    properties: dict[str, PropertyScalar] = Field(default_factory=dict)

    def __getitem__(self, key: str) -> PropertyScalar:
        return self.properties[key]

    def __contains__(self, key: object) -> bool:
        return key in self.properties

    def __len__(self) -> int:
        return len(self.properties)

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def keys(self) -> KeysView[str]:
        return self.properties.keys()

    def items(self) -> ItemsView[str, PropertyScalar]:
        return self.properties.items()
