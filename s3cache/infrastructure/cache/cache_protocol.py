"""Cache connection protocol (DIP). Implementation: S3CacheConnection.

This is the surface a generic cache client/policy layer drives: lifecycle,
segment validation and keyed get/set/drop with millisecond TTLs.
"""

from typing import Any, Protocol

from s3cache.domain.exceptions import InvalidSegmentNameError
from s3cache.domain.value_objects import CachedItem


class CacheConnectionProtocol(Protocol):
    """Protocol for cache connections used by a cache policy layer."""

    async def start(self) -> None:
        """Connect and verify access. Safe to call repeatedly and concurrently."""
        ...

    def stop(self) -> None:
        """Release the connection. Safe to call when never started."""
        ...

    def is_ready(self) -> bool:
        """Return True if started and usable."""
        ...

    def validate_segment_name(self, name: str) -> InvalidSegmentNameError | None:
        """Return an error if the segment name is unusable, else None."""
        ...

    async def get(self, key: Any) -> CachedItem | None:
        """Return the cached item or None on miss/expiry."""
        ...

    async def set(self, key: Any, value: Any, ttl: int) -> None:
        """Store value with TTL in milliseconds."""
        ...

    async def drop(self, key: Any) -> None:
        """Remove key. Missing keys are not an error."""
        ...
