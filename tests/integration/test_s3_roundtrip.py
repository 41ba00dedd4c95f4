"""S3 integration tests. Require a reachable bucket (S3_CACHE_* env); objects use a unique segment."""

import asyncio
import uuid

import pytest

from s3cache import CacheKey, S3CacheConnection
from s3cache.core.config import ConnectionSettings


@pytest.fixture
async def live_connection(s3_settings: ConnectionSettings) -> S3CacheConnection:
    async with S3CacheConnection(s3_settings) as conn:
        yield conn


@pytest.fixture
def segment() -> str:
    return f"it-{uuid.uuid4().hex[:12]}"


@pytest.mark.requires_s3
@pytest.mark.asyncio
async def test_set_get_drop(live_connection: S3CacheConnection, segment: str) -> None:
    """Write, read back, then drop a text entry."""
    key = CacheKey(segment, "k")
    await live_connection.set(key, "123", 5000)
    result = await live_connection.get(key)
    assert result is not None
    assert result.item == "123"
    await live_connection.drop(key)
    assert await live_connection.get(key) is None


@pytest.mark.requires_s3
@pytest.mark.asyncio
async def test_json_and_binary(live_connection: S3CacheConnection, segment: str) -> None:
    await live_connection.set(CacheKey(segment, "json"), {"a": [1, 2]}, 5000)
    await live_connection.set(CacheKey(segment, "bin"), b"\x00\x01", 5000)
    assert (await live_connection.get(CacheKey(segment, "json"))).item == {"a": [1, 2]}
    assert (await live_connection.get(CacheKey(segment, "bin"))).item == b"\x00\x01"
    await live_connection.drop(CacheKey(segment, "json"))
    await live_connection.drop(CacheKey(segment, "bin"))


@pytest.mark.requires_s3
@pytest.mark.asyncio
async def test_short_ttl_expires(live_connection: S3CacheConnection, segment: str) -> None:
    key = CacheKey(segment, "short")
    await live_connection.set(key, "x", 1)
    await asyncio.sleep(0.05)
    assert await live_connection.get(key) is None
    await live_connection.drop(key)


@pytest.mark.requires_s3
@pytest.mark.asyncio
async def test_drop_missing(live_connection: S3CacheConnection, segment: str) -> None:
    await live_connection.drop(CacheKey(segment, "never-written"))
    await live_connection.drop(CacheKey(segment, "never-written"))
