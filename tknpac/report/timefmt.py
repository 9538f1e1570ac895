"""Coarse human durations for ages and run durations."""

from datetime import datetime, timedelta

NOT_STARTED = "not started"
IN_PROGRESS = "running"
UNKNOWN_DURATION = "Unknown"
JUST_NOW = "just now"

# Largest first; months and years are approximate.
_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def humanize(delta: timedelta) -> str:
    """Render delta in its largest non-zero unit, e.g. "16 minutes".

    Raises ValueError for negative deltas.
    """
    seconds = int(delta.total_seconds())
    if seconds < 0:
        raise ValueError(f"negative duration: {delta}")
    for name, size in _UNITS:
        count = seconds // size
        if count:
            return f"{count} {name}" + ("" if count == 1 else "s")
    return "0 seconds"


def format_age(start: datetime | None, now: datetime) -> str:
    """Time since start relative to now, e.g. "2 hours ago"."""
    if start is None:
        return NOT_STARTED
    delta = now - start
    if delta < timedelta(seconds=1):
        return JUST_NOW
    return f"{humanize(delta)} ago"


def format_duration(start: datetime | None, completion: datetime | None) -> str:
    """Elapsed time between start and completion.

    A completion earlier than the start is inconsistent data and renders as
    Unknown instead of a negative value.
    """
    if start is None:
        return NOT_STARTED
    if completion is None:
        return IN_PROGRESS
    if completion < start:
        return UNKNOWN_DURATION
    return humanize(completion - start)
