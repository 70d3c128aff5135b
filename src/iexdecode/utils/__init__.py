"""Utility functions for iexdecode."""

from __future__ import annotations

from .timestamps import MAX_TIMESTAMP_NS, MIN_TIMESTAMP_NS, to_datetime, validate_timestamp

__all__ = [
    "MIN_TIMESTAMP_NS",
    "MAX_TIMESTAMP_NS",
    "to_datetime",
    "validate_timestamp",
]
