from __future__ import annotations

import pytest

from pybluelink.exceptions import ChargeLimitError
from pybluelink.models.charge import KnownChargeTargets
from pybluelink.state.charge_limits import ChargeLimitField, ChargeLimitState


def test_merge_keeps_other_field() -> None:
    limits = ChargeLimitState(slow=60, fast=90)

    request = limits.merge(ChargeLimitField.FAST, 80)

    assert (request.slow, request.fast) == (60, 80)
    assert (limits.slow, limits.fast) == (60, 80)


def test_merge_rejects_invalid_value_without_touching_cell() -> None:
    limits = ChargeLimitState(slow=60, fast=90)

    with pytest.raises(ChargeLimitError):
        limits.merge(ChargeLimitField.SLOW, 75)

    assert (limits.slow, limits.fast) == (60, 90)


def test_merge_rejects_while_other_field_unknown() -> None:
    limits = ChargeLimitState()

    with pytest.raises(ChargeLimitError):
        limits.merge(ChargeLimitField.SLOW, 80)

    assert limits.slow is None
    assert not limits.is_known


def test_merge_rejects_invalid_cached_value() -> None:
    limits = ChargeLimitState(slow=60, fast=85)

    with pytest.raises(ChargeLimitError):
        limits.merge(ChargeLimitField.SLOW, 70)

    assert (limits.slow, limits.fast) == (60, 85)


def test_device_targets_overwrite_both_fields() -> None:
    limits = ChargeLimitState(slow=50, fast=50)

    limits.apply_device_targets(KnownChargeTargets(slow=70, fast=100))

    assert limits.snapshot() == KnownChargeTargets(slow=70, fast=100)
    assert limits.is_known
