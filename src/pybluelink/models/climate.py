"""Climate start parameters."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pybluelink._constants import CLIMATE_IGNITION_DURATION, CLIMATE_TEMPERATURE


class ClimateStartParams(BaseModel):
    """Arguments for the vehicle's climate ``start`` command.

    Duration and temperature are passed through in the remote API's own
    units; nothing is converted here.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    air_ctrl: bool = Field(default=False, serialization_alias="airCtrl")
    ignition_on_duration: int = Field(default=CLIMATE_IGNITION_DURATION, serialization_alias="igniOnDuration")
    air_temperature: int = Field(default=CLIMATE_TEMPERATURE, serialization_alias="airTempvalue")
    defrost: bool = Field(default=False, serialization_alias="defrost")
    heating: bool = Field(default=False, serialization_alias="heating1")

    def to_payload(self) -> dict[str, Any]:
        """Return the dict the remote API expects."""
        return self.model_dump(by_alias=True)


DEFAULT_CLIMATE = ClimateStartParams()
"""The only climate configuration the bridge sends."""
