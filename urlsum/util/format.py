"""Small formatting helpers used when rendering transcripts."""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import TypeVar

T = TypeVar("T")

# (seconds per unit, singular label, plural label)
_RELATIVE_UNITS = [
    (365 * 24 * 3600, "yr.", "yr."),
    (30 * 24 * 3600, "mo.", "mo."),
    (7 * 24 * 3600, "wk.", "wk."),
    (24 * 3600, "day", "days"),
    (3600, "hr.", "hr."),
    (60, "min.", "min."),
    (1, "sec.", "sec."),
]


def format_relative(moment: datetime, now: datetime | None = None) -> str:
    """Format a timestamp relative to now in short English units.

    Examples: "5 min. ago", "3 hr. ago", "2 days ago", "in 4 wk."

    Args:
        moment: Timestamp to describe (naive values are treated as UTC)
        now: Reference time, defaults to the current time

    Returns:
        Relative description
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    delta = int((now - moment).total_seconds())
    seconds = abs(delta)
    if seconds < 1:
        return "now"

    for unit_seconds, singular, plural in _RELATIVE_UNITS:
        if seconds >= unit_seconds:
            value = seconds // unit_seconds
            label = singular if value == 1 else plural
            return f"{value} {label} ago" if delta > 0 else f"in {value} {label}"

    return "now"


def format_abbreviated(value: int) -> str:
    """Abbreviate large counts (1234 -> "1.2k", 3400000 -> "3.4M")."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}k"
    return str(value)


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split a sequence into consecutive slices of at most ``size`` items."""
    if size < 1:
        raise ValueError("Chunk size must be positive")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]
