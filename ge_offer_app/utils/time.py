"""
Tick-grid time utilities.

Price history arrives as epoch-second bucket timestamps on a fixed interval.
These helpers build and describe that grid without consulting wall-clock time.
"""

from collections.abc import Iterator
from datetime import datetime, timezone


def tick_grid(start: int, end: int, step: int) -> Iterator[int]:
    """
    Yield grid timestamps from start to end inclusive.

    Args:
        start: First timestamp (epoch seconds)
        end: Last timestamp (epoch seconds), included when on the grid
        step: Grid spacing in seconds

    Returns:
        Iterator over start, start + step, ... <= end
    """
    if step <= 0:
        raise ValueError(f"Grid step must be positive, got {step}")
    return iter(range(start, end + 1, step))


def is_on_grid(timestamp: int, anchor: int, step: int) -> bool:
    """Check whether a timestamp falls on the grid anchored at anchor."""
    return timestamp >= anchor and (timestamp - anchor) % step == 0


def to_utc_datetime(timestamp: int) -> datetime:
    """Convert an epoch-second tick timestamp to an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def format_tick_time(timestamp: int) -> str:
    """
    Format tick timestamp for logging and serialized output.

    Returns:
        ISO8601 formatted string
    """
    return to_utc_datetime(timestamp).isoformat()
