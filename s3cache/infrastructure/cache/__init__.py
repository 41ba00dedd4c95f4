"""Cache: S3-backed cache connection and its key, value and TTL encodings.

S3CacheConnection composes storage_path_for_key (keys.py), the value codec
(codec.py), TTL metadata (ttl.py) and segment validation (segments.py)
with calls to the storage transport.
"""

from s3cache.infrastructure.cache.cache_protocol import CacheConnectionProtocol
from s3cache.infrastructure.cache.codec import EncodedValue, decode_value, encode_value
from s3cache.infrastructure.cache.keys import sanitize_path_component, storage_path_for_key
from s3cache.infrastructure.cache.s3_connection import S3CacheConnection
from s3cache.infrastructure.cache.segments import validate_segment_name
from s3cache.infrastructure.cache.ttl import (
    TTLState,
    build_ttl_metadata,
    expiry_hint,
    remaining_ttl,
)

__all__ = [
    "CacheConnectionProtocol",
    "EncodedValue",
    "S3CacheConnection",
    "TTLState",
    "build_ttl_metadata",
    "decode_value",
    "encode_value",
    "expiry_hint",
    "remaining_ttl",
    "sanitize_path_component",
    "storage_path_for_key",
    "validate_segment_name",
]
