"""Parsing of Go-style duration strings such as ``"1h30m"``."""

import re
from datetime import timedelta

_UNITS = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_RE = re.compile(r"^(?:\d+(?:\.\d+)?(?:ms|s|m|h))+$")
_SEGMENT_RE = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")


def parse_duration(value: str) -> timedelta:
    """Parse a duration like ``"90s"``, ``"10m"`` or ``"1h30m"``.

    Raises:
        ValueError: If the string is not a positive duration
    """
    text = value.strip()
    if not _DURATION_RE.match(text):
        raise ValueError(
            f"Invalid duration {value!r}: expected a sequence of numbers with "
            "units ms, s, m or h (e.g. \"10m\", \"1h30m\")"
        )

    seconds = sum(
        float(amount) * _UNITS[unit] for amount, unit in _SEGMENT_RE.findall(text)
    )
    if seconds <= 0:
        raise ValueError(f"Invalid duration {value!r}: must be greater than zero")

    return timedelta(seconds=seconds)
