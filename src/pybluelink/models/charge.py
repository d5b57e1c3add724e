"""Charge-target models.

The status payload reports charge targets as ``targetSOClist``: a list of
``{plugType, targetSOClevel}`` entries whose order is not stable.  Decoding
yields a tagged union so callers never index into a list of unexpected
length:

* :class:`KnownChargeTargets`: exactly two entries, slow/fast resolved.
* :class:`UnknownChargeTargets`: anything else, kept verbatim.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pybluelink._constants import CHARGE_LIMIT_VALUES
from pybluelink.exceptions import ChargeLimitError
from pybluelink.models._base import BluelinkBaseModel, BluelinkEnum


class PlugType(BluelinkEnum):
    """Charging method a target applies to."""

    UNKNOWN = -1
    FAST = 0  # DC
    SLOW = 1  # AC


class TargetSoc(BluelinkBaseModel):
    """One ``targetSOClist`` entry."""

    plug_type: int
    """Raw plug type code; see :class:`PlugType`."""
    target_soc_level: int = Field(alias="targetSOClevel")
    """Target state of charge in percent."""


class KnownChargeTargets(BaseModel):
    """Slow/fast targets resolved from a two-entry list."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["known"] = "known"
    slow: int
    fast: int


class UnknownChargeTargets(BaseModel):
    """A target list of unexpected length (0, 1 or more than 2 entries)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unknown"] = "unknown"
    entries: tuple[TargetSoc, ...] = ()


ChargeTargets = Annotated[KnownChargeTargets | UnknownChargeTargets, Field(discriminator="kind")]


def decode_charge_targets(entries: Sequence[TargetSoc]) -> ChargeTargets:
    """Resolve which list entry is the slow and which the fast target.

    The first entry's plug type decides the layout: ``SLOW`` first means
    index 0 is slow and index 1 is fast; any other first plug type means
    the reverse.
    """
    if len(entries) != 2:
        return UnknownChargeTargets(entries=tuple(entries))

    first, second = entries
    if first.plug_type == PlugType.SLOW:
        return KnownChargeTargets(slow=first.target_soc_level, fast=second.target_soc_level)
    return KnownChargeTargets(slow=second.target_soc_level, fast=first.target_soc_level)


def validate_charge_limit(value: Any) -> int:
    """Return *value* as an int if it is an accepted charge limit.

    Raises
    ------
    ChargeLimitError
        When *value* is not one of ``50, 60, 70, 80, 90, 100``.
    """
    allowed = ", ".join(str(v) for v in CHARGE_LIMIT_VALUES)
    # bool is an int subclass; True/False are never percentages.
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value not in CHARGE_LIMIT_VALUES:
        raise ChargeLimitError(f"Charge target values are limited to {allowed}", value=value)
    return int(value)


class ChargeTargetsRequest(BaseModel):
    """Arguments for ``set_charge_targets``.

    The remote API requires both targets even when only one changed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    slow: int
    fast: int

    @field_validator("slow", "fast", mode="before")
    @classmethod
    def _check_domain(cls, value: Any) -> int:
        # ChargeLimitError is a ValueError, so pydantic reports it as a validation error.
        return validate_charge_limit(value)

    def to_payload(self) -> dict[str, int]:
        return {"fast": self.fast, "slow": self.slow}
