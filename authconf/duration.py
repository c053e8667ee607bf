"""Duration notation used by time based settings such as `refresh_interval`."""

import re
from datetime import timedelta

_DURATION_RE = re.compile(r"(?P<value>[1-9]\d*)(?P<unit>[smhdwMy])?")

_UNITS = {
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
    "w": timedelta(weeks=1),
    "M": timedelta(days=30),
    "y": timedelta(days=365),
}


class DurationParseError(ValueError):
    """Raised when a string is not valid duration notation."""

    pass


def parse_duration(value: str) -> timedelta:
    """Parse duration notation such as ``5m``, ``1h`` or ``90`` (seconds).

    Supported units are s, m, h, d, w, M (30 days) and y (365 days). A bare
    integer is a number of seconds. The empty string and ``"0"`` both mean
    zero.

    Raises:
        DurationParseError: If the value is not in duration notation
    """
    if value in ("", "0"):
        return timedelta()

    match = _DURATION_RE.fullmatch(value)
    if match is None:
        raise DurationParseError(
            f"Could not convert the input string of {value} into a duration"
        )

    amount = int(match.group("value"))
    unit = match.group("unit") or "s"
    return amount * _UNITS[unit]
