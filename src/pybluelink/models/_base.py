"""Base model and enum for vehicle status payloads.

Every payload model inherits from :class:`BluelinkBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` values so
  the field default is used.
* A ``raw`` dict that captures the original payload.

State enums inherit from :class:`BluelinkEnum` which adds an ``UNKNOWN``
member at ``-1`` and a ``_missing_`` hook that returns ``UNKNOWN``
for any value without a mapped member.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class BluelinkEnum(enum.IntEnum):
    """Base for payload state enums.

    Every subclass **must** define ``UNKNOWN = -1``.
    Values the API sends that have no mapped member automatically
    resolve to ``UNKNOWN`` instead of raising ``ValueError``.
    """

    @classmethod
    def _missing_(cls, value: object) -> BluelinkEnum:
        if hasattr(cls, "UNKNOWN"):
            unknown: BluelinkEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))


class BluelinkBaseModel(BaseModel):
    """Base for status payload models.

    Handles:
    * camelCase → snake_case via ``alias_generator=to_camel``
    * ``None`` values → dropped so the field default is used
    * Stashes the original payload dict in ``raw``
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original payload dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Drop ``None`` values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Keep an explicitly passed raw= (kwargs construction in tests).
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
