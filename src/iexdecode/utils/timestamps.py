"""Timestamp validation and conversion.

IEX timestamps are integer nanoseconds since the POSIX epoch (UTC).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

# 2013-10-25T00:00:00Z, the start of IEX trading.
MIN_TIMESTAMP_NS = 1_382_659_200_000_000_000

# 2100-01-01T00:00:00Z.
MAX_TIMESTAMP_NS = 4_102_444_800_000_000_000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def validate_timestamp(
    timestamp: int,
    min_ns: int = MIN_TIMESTAMP_NS,
    max_ns: int = MAX_TIMESTAMP_NS,
) -> bool:
    """Check that a timestamp lies strictly inside ``(min_ns, max_ns)``.

    Example:
        >>> validate_timestamp(1517058017224122394)
        True
        >>> validate_timestamp(1000)
        False
    """
    return min_ns < timestamp < max_ns


def to_datetime(timestamp: int) -> datetime:
    """Convert epoch nanoseconds to an aware UTC datetime.

    Sub-microsecond precision is truncated.
    """
    return _EPOCH + timedelta(microseconds=timestamp // 1000)
