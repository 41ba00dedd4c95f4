"""Domain value objects for the cache connection.

Value objects are immutable types that represent cache concepts with
self-validation. They have no identity, only value.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from s3cache.domain.exceptions import InvalidKeyError


@dataclass(frozen=True)
class CacheKey:
    """Value object for a cache key: (segment, id) within a bucket.

    Both fields must be present strings. An empty id is valid and maps to
    the segment path alone; a missing id is not.
    """

    segment: str
    id: str

    def __post_init__(self) -> None:
        if self.segment is None:
            raise InvalidKeyError("Invalid key: missing segment", "segment")
        if self.id is None:
            raise InvalidKeyError("Invalid key: missing id", "id")
        if not isinstance(self.segment, str):
            raise InvalidKeyError("Invalid key: segment must be a string", "segment")
        if not isinstance(self.id, str):
            raise InvalidKeyError("Invalid key: id must be a string", "id")

    @classmethod
    def from_value(cls, key: Any) -> "CacheKey":
        """Coerce a CacheKey or a {"segment", "id"} mapping into a CacheKey.

        Raises:
            InvalidKeyError: key is None, of an unsupported type, or missing fields.
        """
        if isinstance(key, CacheKey):
            return key
        if key is None:
            raise InvalidKeyError("Invalid key: key is required")
        if isinstance(key, Mapping):
            return cls(segment=key.get("segment"), id=key.get("id"))
        raise InvalidKeyError(f"Invalid key type: {type(key).__name__}")


@dataclass(frozen=True)
class CachedItem:
    """A cache hit.

    Attributes:
        item: Decoded value.
        stored: When the entry was written (UTC).
        ttl: Remaining time to live in milliseconds (always > 0).
    """

    item: Any
    stored: datetime
    ttl: int
