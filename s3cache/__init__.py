"""s3cache: a cache connection that stores entries as objects in an S3 bucket.

Typical use::

    conn = S3CacheConnection(bucket="my-cache", access_key_id="...", secret_access_key="...")
    await conn.start()
    await conn.set(CacheKey("sessions", "abc"), {"user": 1}, ttl=60_000)
    hit = await conn.get(CacheKey("sessions", "abc"))
    conn.stop()
"""

from s3cache.core.config import ConnectionSettings, get_settings
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
from s3cache.infrastructure.cache import CacheConnectionProtocol, S3CacheConnection
from s3cache.infrastructure.exceptions import (
    BackendError,
    SelfTestError,
    StorageNotFoundError,
)

__version__ = "1.0.0"

__all__ = [
    "BackendError",
    "CacheConnectionProtocol",
    "CacheKey",
    "CachedItem",
    "ConfigError",
    "ConnectionSettings",
    "InvalidKeyError",
    "InvalidSegmentNameError",
    "InvalidTTLError",
    "NotStartedError",
    "S3CacheConnection",
    "S3CacheException",
    "SelfTestError",
    "SerializationError",
    "StorageNotFoundError",
    "ValidationException",
    "get_settings",
]
