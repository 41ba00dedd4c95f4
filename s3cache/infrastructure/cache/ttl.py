"""TTL metadata: write-time stamp and read-time expiry evaluation.

Objects carry two metadata values: when they were stored and for how long
(milliseconds). The deadline is recomputed on every read as stored + ttl.
The backend Expires header is only a hint; expiry is decided here.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from email.utils import parsedate_to_datetime

from s3cache.core.constants import JS_DATE_FORMAT, METADATA_STORED, METADATA_TTL
from s3cache.shared.utils.datetime import (
    ensure_utc,
    from_timestamp_ms_utc,
    to_milliseconds,
)


@dataclass(frozen=True)
class TTLState:
    """Result of evaluating an object's TTL metadata at a point in time."""

    stored: datetime | None
    remaining_ms: float

    @property
    def expired(self) -> bool:
        return self.stored is None or self.remaining_ms <= 0


def build_ttl_metadata(ttl_ms: int | float, now: datetime) -> dict[str, str]:
    """Metadata for a write at `now` with duration `ttl_ms`."""
    return {
        METADATA_STORED: ensure_utc(now).isoformat(),
        METADATA_TTL: str(int(ttl_ms)),
    }


def expiry_hint(ttl_ms: int | float, now: datetime) -> datetime | None:
    """Advisory absolute expiry for the backend (now + ttl); None if out of range."""
    try:
        return ensure_utc(now) + timedelta(milliseconds=ttl_ms)
    except OverflowError:
        return None


def _lookup(metadata: Mapping[str, str], name: str) -> str | None:
    for key, value in metadata.items():
        if key.lower() == name:
            return value
    return None


def _parse_js_date(raw: str) -> datetime | None:
    """Parse the string forms a JavaScript Date takes when sent as a header.

    Date.toString(): "Mon Oct 19 2026 08:45:00 GMT+0000 (Coordinated Universal Time)"
    Date.toUTCString(): "Mon, 19 Oct 2026 08:45:00 GMT"
    """
    head = raw.split(" (", 1)[0].strip()
    try:
        return datetime.strptime(head, JS_DATE_FORMAT)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(raw)
    except (TypeError, ValueError):
        return None


def parse_stored(raw: str | None) -> datetime | None:
    """Parse the stored timestamp. None if unparseable.

    Accepts epoch milliseconds, ISO-8601, and the JavaScript Date strings
    written by catbox-s3 clients sharing the bucket.
    """
    if not raw:
        return None
    try:
        return from_timestamp_ms_utc(float(raw))
    except ValueError:
        pass
    except (OverflowError, OSError):
        return None
    try:
        return ensure_utc(datetime.fromisoformat(raw))
    except ValueError:
        pass
    return ensure_utc(_parse_js_date(raw))


def parse_ttl(raw: str | None) -> float:
    """Parse the ttl duration in milliseconds; absent, unparseable or non-finite is 0."""
    if not raw:
        return 0
    try:
        ttl = float(raw)
    except ValueError:
        return 0
    if not math.isfinite(ttl):
        return 0
    return ttl


def remaining_ttl(metadata: Mapping[str, str] | None, now: datetime) -> TTLState:
    """Evaluate remaining time to live at `now`.

    Args:
        metadata: User metadata of the stored object (keys matched case-insensitively).
        now: Current time.

    Returns:
        TTLState; expired when stored is missing or (stored + ttl) - now <= 0.
    """
    metadata = metadata or {}
    stored = parse_stored(_lookup(metadata, METADATA_STORED))
    if stored is None:
        return TTLState(stored=None, remaining_ms=0)
    ttl = parse_ttl(_lookup(metadata, METADATA_TTL))
    elapsed = to_milliseconds(ensure_utc(now) - stored)
    return TTLState(stored=stored, remaining_ms=ttl - elapsed)
