"""Parsing and formatting of run durations.

Durations are stored as integer nanoseconds and exchanged as
``H:mm:ss[.fffffffff]`` strings, e.g. ``"0:10:22.111"``.
"""

from __future__ import annotations

import re

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MILLISECOND = 1_000_000

_DURATION_PATTERN = re.compile(
    r"^(?P<hours>\d+):(?P<minutes>[0-5]\d):(?P<seconds>[0-5]\d)(?:\.(?P<fraction>\d{1,9}))?$"
)


def parse_duration(text: str) -> int:
    """Parse a duration string into nanoseconds.

    Raises ``ValueError`` for anything that is not ``H:mm:ss`` with an
    optional fraction of up to nine digits.
    """

    match = _DURATION_PATTERN.match(text.strip()) if isinstance(text, str) else None
    if match is None:
        raise ValueError("Duration must look like H:mm:ss or H:mm:ss.fffffffff")

    total_seconds = (
        int(match["hours"]) * 3600 + int(match["minutes"]) * 60 + int(match["seconds"])
    )
    fraction = (match["fraction"] or "").ljust(9, "0")
    return total_seconds * NANOS_PER_SECOND + int(fraction)


def format_duration(nanoseconds: int) -> str:
    """Render nanoseconds as ``H:mm:ss`` with trailing fractional zeros trimmed."""

    sign = "-" if nanoseconds < 0 else ""
    seconds, nanos = divmod(abs(nanoseconds), NANOS_PER_SECOND)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    text = f"{sign}{hours}:{minutes:02d}:{seconds:02d}"
    if nanos:
        text += "." + f"{nanos:09d}".rstrip("0")
    return text


__all__ = [
    "NANOS_PER_MILLISECOND",
    "NANOS_PER_SECOND",
    "format_duration",
    "parse_duration",
]
