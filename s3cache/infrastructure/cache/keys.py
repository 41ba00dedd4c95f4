"""Storage path builder for cache keys. Single place for path format (DRY).

Segment and id are caller-supplied and may contain characters that are
structural in URL paths and queries; those are replaced before the path
reaches the transport.
"""

from typing import Any

from s3cache.core.constants import (
    KEY_PATH_SEP,
    RESERVED_PATH_CHARS,
    RESERVED_PATH_REPLACEMENT,
)
from s3cache.domain.value_objects import CacheKey

_RESERVED_TABLE = str.maketrans(
    {ch: RESERVED_PATH_REPLACEMENT for ch in RESERVED_PATH_CHARS}
)


def sanitize_path_component(value: str) -> str:
    """Strip one leading and one trailing slash, then replace ? & # % with ~.

    Args:
        value: Raw segment or id.

    Returns:
        Component safe to embed in a storage path.
    """
    if value.startswith(KEY_PATH_SEP):
        value = value[1:]
    if value.endswith(KEY_PATH_SEP):
        value = value[:-1]
    return value.translate(_RESERVED_TABLE)


def storage_path_for_key(key: CacheKey | Any) -> str:
    """Storage path for a cache key: "segment/id", or "segment" when id is empty.

    Args:
        key: CacheKey or {"segment", "id"} mapping; never mutated.

    Raises:
        InvalidKeyError: If the key is None or missing segment/id.
    """
    cache_key = CacheKey.from_value(key)
    segment = sanitize_path_component(cache_key.segment)
    item_id = sanitize_path_component(cache_key.id)
    if item_id == "":
        return segment
    return f"{segment}{KEY_PATH_SEP}{item_id}"
