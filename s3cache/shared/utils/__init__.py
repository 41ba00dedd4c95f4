"""Shared utilities: UTC datetime helpers."""

from s3cache.shared.utils.datetime import (
    ensure_utc,
    from_timestamp_ms_utc,
    to_milliseconds,
    utc_now,
)

__all__ = [
    "ensure_utc",
    "from_timestamp_ms_utc",
    "to_milliseconds",
    "utc_now",
]
