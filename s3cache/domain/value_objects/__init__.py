"""Domain value objects (CacheKey, CachedItem)."""

from s3cache.domain.value_objects.core import CachedItem, CacheKey

__all__ = ["CacheKey", "CachedItem"]
