"""Custom exception hierarchy for pybluelink."""

from __future__ import annotations


class BluelinkError(Exception):
    """Base exception for all pybluelink errors."""


class BluelinkConfigError(BluelinkError):
    """Invalid or missing configuration."""


class BluelinkApiError(BluelinkError):
    """The remote vehicle API rejected or failed a request."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        action: str = "",
    ) -> None:
        self.code = code
        self.action = action
        super().__init__(message)


class BluelinkAuthenticationError(BluelinkApiError):
    """Login failed; the bridge stays idle until restarted."""


class BluelinkNormalizationError(BluelinkError):
    """A status payload could not be mapped to properties.

    Raised when a capability sub-record is present but its nested
    fields are missing or malformed (e.g. ``evStatus`` without a
    ``drvDistance`` entry).  Absent sub-records never raise.
    """


class ChargeLimitError(BluelinkError, ValueError):
    """Charge-limit value outside the accepted set."""

    def __init__(self, message: str, *, value: object = None) -> None:
        self.value = value
        super().__init__(message)


class UnknownCommandError(BluelinkError):
    """No command is routed for a property path."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)
