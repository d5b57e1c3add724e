"""Property store boundary and an in-memory implementation.

The host automation system owns the real property tree.  The bridge only
needs the narrow surface in :class:`PropertyStore`; :class:`MemoryPropertyStore`
implements it for tests and for embedding without a host.
"""

from __future__ import annotations

import copy
import enum
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from pybluelink.models.state import PropertyScalar

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PropertyType(enum.StrEnum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"


class PropertyDefinition(BaseModel):
    """Metadata declared when a property is created."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    type: PropertyType
    role: str = "indicator"
    read: bool = True
    write: bool = False


class PropertyValue(BaseModel):
    """A property value plus its acknowledgement flag.

    ``ack=True`` marks a confirmed device read; ``ack=False`` marks a
    pending user intent.
    """

    model_config = ConfigDict(frozen=True)

    val: PropertyScalar | None = None
    ack: bool = False
    ts: datetime = Field(default_factory=_utcnow)


ChangeHandler = Callable[[str, PropertyValue], Awaitable[None]]
"""Called with the full property id and the new value."""


class PropertyStore(Protocol):
    """What the bridge needs from the host property tree."""

    def full_id(self, key: str) -> str:
        ...

    async def ensure_property(self, key: str, definition: PropertyDefinition) -> None:
        ...

    async def read(self, key: str) -> PropertyValue | None:
        ...

    async def write(self, key: str, value: PropertyScalar | None, *, ack: bool) -> None:
        ...

    def subscribe(self, key: str) -> None:
        ...

    def set_change_handler(self, handler: ChangeHandler | None) -> None:
        ...


class MemoryPropertyStore:
    """In-memory property tree with change notifications.

    Keys are relative to *namespace*; change handlers receive the full id
    (``"<namespace>.<key>"``).  Only subscribed keys notify.
    """

    def __init__(
        self,
        namespace: str = "bluelink.0",
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._namespace = namespace
        self._clock = clock
        self._objects: dict[str, PropertyDefinition] = {}
        self._values: dict[str, PropertyValue] = {}
        self._subscriptions: set[str] = set()
        self._handler: ChangeHandler | None = None

    @property
    def namespace(self) -> str:
        return self._namespace

    def full_id(self, key: str) -> str:
        return f"{self._namespace}.{key}"

    def set_change_handler(self, handler: ChangeHandler | None) -> None:
        self._handler = handler

    async def ensure_property(self, key: str, definition: PropertyDefinition) -> None:
        """Create *key* unless it already exists; existing metadata is kept."""
        if key not in self._objects:
            self._objects[key] = definition

    def subscribe(self, key: str) -> None:
        self._subscriptions.add(key)

    def is_subscribed(self, key: str) -> bool:
        return key in self._subscriptions

    def definition(self, key: str) -> PropertyDefinition | None:
        return self._objects.get(key)

    async def read(self, key: str) -> PropertyValue | None:
        return self._values.get(key)

    async def write(self, key: str, value: PropertyScalar | None, *, ack: bool) -> None:
        if key not in self._objects:
            _logger.debug("Write to undeclared property %s", key)
        state = PropertyValue(val=copy.deepcopy(value), ack=ack, ts=self._clock())
        self._values[key] = state

        handler = self._handler
        if handler is not None and key in self._subscriptions:
            await handler(self.full_id(key), state)

    def snapshot(self) -> dict[str, PropertyScalar | None]:
        """Current values keyed by relative property path."""
        return {key: state.val for key, state in self._values.items()}
