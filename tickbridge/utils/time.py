"""
Time utilities for host server time and the wire timestamp format.

The wire format is strict ISO-8601 in UTC with exactly three fractional
digits and a trailing 'Z', e.g. ``2025-01-01T00:00:00.000Z``.
"""

from datetime import datetime, timezone
from typing import Optional

WIRE_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


def to_utc(ts: datetime) -> datetime:
    """
    Normalize a timestamp to an aware UTC datetime.

    Naive datetimes are taken to already be UTC, which is how trading hosts
    running in UTC report server time.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def get_server_time(server_ts: Optional[datetime] = None) -> datetime:
    """
    Get the host server time, falling back to wall-clock UTC.

    Args:
        server_ts: Optional server timestamp reported by the host

    Returns:
        Aware UTC datetime
    """
    if server_ts is not None:
        return to_utc(server_ts)

    return datetime.now(timezone.utc)


def format_wire_timestamp(ts: datetime) -> str:
    """
    Format a timestamp for the outbound tick line.

    Args:
        ts: Timestamp to format (naive values are treated as UTC)

    Returns:
        ISO-8601 string with millisecond precision and 'Z' suffix
    """
    utc_ts = to_utc(ts)
    return f"{utc_ts.strftime(WIRE_TIME_FORMAT)}.{utc_ts.microsecond // 1000:03d}Z"


def parse_wire_timestamp(value: str) -> datetime:
    """
    Parse a wire timestamp back into an aware UTC datetime.

    Raises:
        ValueError: If the string is not in the wire format
    """
    if not value.endswith("Z"):
        raise ValueError(f"Wire timestamp must end with 'Z': {value!r}")

    return to_utc(datetime.fromisoformat(value[:-1] + "+00:00"))


def elapsed_seconds(start: float, end: float) -> float:
    """Elapsed seconds between two monotonic clock readings."""
    return end - start
