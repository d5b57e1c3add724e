"""Cached slow/fast charge limits.

The remote API only accepts both targets at once, while the property tree
lets users edit them one at a time.  :class:`ChargeLimitState` keeps the
last known pair so a single-field edit can be completed with the other
field's current value.

Both the poll cycle (device read) and the command dispatcher (optimistic
user write) update the cell; the last writer wins.
"""

from __future__ import annotations

import enum

from pydantic import ValidationError

from pybluelink.exceptions import ChargeLimitError
from pybluelink.models.charge import ChargeTargetsRequest, KnownChargeTargets, validate_charge_limit


class ChargeLimitField(enum.StrEnum):
    SLOW = "slow"
    FAST = "fast"


class ChargeLimitState:
    """Process-lifetime cell holding the slow/fast charge limits."""

    def __init__(self, *, slow: int | None = None, fast: int | None = None) -> None:
        self._slow = slow
        self._fast = fast

    @property
    def slow(self) -> int | None:
        return self._slow

    @property
    def fast(self) -> int | None:
        return self._fast

    @property
    def is_known(self) -> bool:
        return self._slow is not None and self._fast is not None

    def snapshot(self) -> KnownChargeTargets | None:
        if self._slow is None or self._fast is None:
            return None
        return KnownChargeTargets(slow=self._slow, fast=self._fast)

    def apply_device_targets(self, targets: KnownChargeTargets) -> None:
        """Overwrite both fields with a confirmed device read."""
        self._slow = targets.slow
        self._fast = targets.fast

    def merge(self, field: ChargeLimitField, value: object) -> ChargeTargetsRequest:
        """Overwrite one field and return the full request for the API.

        The cell is only modified when the resulting request is valid.

        Raises
        ------
        ChargeLimitError
            When *value* is outside the accepted set, when the other
            field is still unknown, or when the cached other field is
            itself not an accepted value.
        """
        limit = validate_charge_limit(value)
        slow = limit if field == ChargeLimitField.SLOW else self._slow
        fast = limit if field == ChargeLimitField.FAST else self._fast
        if slow is None or fast is None:
            raise ChargeLimitError("Current charge limits are unknown until the first status poll", value=value)
        try:
            request = ChargeTargetsRequest(slow=slow, fast=fast)
        except ValidationError as exc:
            raise ChargeLimitError(
                f"Cached charge limits are not accepted by the API: slow={slow} fast={fast}",
                value=value,
            ) from exc
        self._slow = request.slow
        self._fast = request.fast
        return request

    def __repr__(self) -> str:
        return f"ChargeLimitState(slow={self._slow!r}, fast={self._fast!r})"
