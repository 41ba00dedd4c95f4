"""Domain layer: value objects and exceptions.

No dependencies on the storage transport. Used by the infrastructure layer.
"""

from s3cache.domain.exceptions import (
    ConfigError,
    InvalidKeyError,
    InvalidSegmentNameError,
    InvalidTTLError,
    NotStartedError,
    S3CacheException,
    SerializationError,
    ValidationException,
)
from s3cache.domain.value_objects import CachedItem, CacheKey

__all__ = [
    "CacheKey",
    "CachedItem",
    "ConfigError",
    "InvalidKeyError",
    "InvalidSegmentNameError",
    "InvalidTTLError",
    "NotStartedError",
    "S3CacheException",
    "SerializationError",
    "ValidationException",
]
