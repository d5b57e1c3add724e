"""Internal constants shared across the library."""

REGION = "EU"
DEFAULT_REQUEST_BUDGET = 100

# Charge targets accepted by the remote API, in percent.
CHARGE_LIMIT_VALUES: tuple[int, ...] = (50, 60, 70, 80, 90, 100)

# ------------------------------------------------------------------
# Fixed climate-on configuration (units are owned by the remote API)
# ------------------------------------------------------------------

CLIMATE_IGNITION_DURATION = 10
CLIMATE_TEMPERATURE = 70

# ------------------------------------------------------------------
# Request budget -> polling interval
# ------------------------------------------------------------------

_MS_PER_DAY = 24 * 60 * 60_000


def poll_interval_ms(request_budget: int) -> float:
    """Return the fixed polling interval for a daily request budget.

    The budget is spent as one evenly spaced poll every ``1440 / budget``
    minutes, i.e. ``(24 * 60 / budget) * 60000`` milliseconds.

    Raises :class:`ValueError` if *request_budget* is below 1.
    """
    budget = int(request_budget)
    if budget < 1:
        raise ValueError(f"request budget must be >= 1, got {request_budget}")
    return _MS_PER_DAY / budget
