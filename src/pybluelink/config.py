"""Bridge configuration for pybluelink."""

from __future__ import annotations

import dataclasses
import enum
import logging
import os
from typing import Any

from pybluelink._constants import DEFAULT_REQUEST_BUDGET, REGION
from pybluelink.exceptions import BluelinkConfigError

_logger = logging.getLogger(__name__)


class Brand(enum.StrEnum):
    """Vehicle brands served by the shared telematics backend."""

    HYUNDAI = "hyundai"
    KIA = "kia"


@dataclasses.dataclass(frozen=True)
class BluelinkConfig:
    """Bridge configuration.

    Parameters
    ----------
    vin : str
        VIN of the single vehicle mirrored by this instance.
    username : str
        Bluelink / UVO account name.
    password : str
        Account password (the credential secret).
    pin : str or None
        Optional remote-control PIN.
    brand : Brand
        ``hyundai`` or ``kia``.
    request : int
        Daily poll budget.  Values below 1 fall back to the default of
        100 with a warning (see :meth:`request_budget`).
    namespace : str
        Host prefix in front of every property path (adapter name and
        instance, e.g. ``"bluelink.0"``).
    """

    vin: str
    username: str
    password: str = ""
    pin: str | None = None
    brand: Brand = Brand.HYUNDAI
    request: int = DEFAULT_REQUEST_BUDGET
    namespace: str = "bluelink.0"

    def __post_init__(self) -> None:
        if not isinstance(self.brand, Brand):
            try:
                brand = Brand(str(self.brand).strip().lower())
            except ValueError as exc:
                raise BluelinkConfigError(f"Unsupported brand: {self.brand!r}") from exc
            object.__setattr__(self, "brand", brand)

    @property
    def region(self) -> str:
        """Backend region; fixed for now."""
        return REGION

    @property
    def request_budget(self) -> int:
        """Daily poll budget after applying the floor clamp."""
        if self.request < 1:
            _logger.warning("Request is under 1 -> using default %d", DEFAULT_REQUEST_BUDGET)
            return DEFAULT_REQUEST_BUDGET
        return int(self.request)

    def validate(self) -> None:
        """Check the settings required before any login attempt.

        Raises
        ------
        BluelinkConfigError
            When the VIN or the username is empty.
        """
        if not self.vin.strip():
            raise BluelinkConfigError("No VIN configured")
        if not self.username.strip():
            raise BluelinkConfigError("No username configured")

    @classmethod
    def from_env(cls, **overrides: Any) -> BluelinkConfig:
        """Create configuration from environment variables.

        Reads ``BLUELINK_VIN``, ``BLUELINK_USERNAME``, ``BLUELINK_PASSWORD``
        and the optional ``BLUELINK_PIN``, ``BLUELINK_BRAND``,
        ``BLUELINK_REQUEST`` and ``BLUELINK_NAMESPACE``.  Explicit keyword
        arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "BLUELINK_VIN": "vin",
            "BLUELINK_USERNAME": "username",
            "BLUELINK_PASSWORD": "password",
            "BLUELINK_PIN": "pin",
            "BLUELINK_BRAND": "brand",
            "BLUELINK_NAMESPACE": "namespace",
        }
        config_kwargs: dict[str, Any] = {"vin": "", "username": ""}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # request is numeric, handle separately
        request_env = env.get("BLUELINK_REQUEST")
        if request_env is not None and "request" not in overrides:
            try:
                config_kwargs["request"] = int(request_env)
            except ValueError as exc:
                raise BluelinkConfigError(f"BLUELINK_REQUEST must be an integer, got {request_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
