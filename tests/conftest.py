"""Pytest configuration and fixtures for s3cache.

Connection tests run against InMemoryObjectStorage, an in-process stand-in
for the S3 transport injected through S3CacheConnection(storage_factory=...).
Integration tests use a real bucket and skip when S3_CACHE_* is not set.
"""

import asyncio
import os
from datetime import datetime

import pytest

from s3cache.core.config import ConnectionSettings, get_settings
from s3cache.infrastructure.cache import S3CacheConnection
from s3cache.infrastructure.exceptions import BackendError, StorageNotFoundError
from s3cache.infrastructure.external.storage import StoredObject

TEST_BUCKET = "test-bucket"

# Captured before _isolate_env strips S3_CACHE_* so integration tests can use a real bucket.
_INTEGRATION_ENV = {
    name[len("S3_CACHE_"):].lower(): value
    for name, value in os.environ.items()
    if name.upper().startswith("S3_CACHE_")
}


class InMemoryObjectStorage:
    """ObjectStorageProtocol backed by a dict. Records calls; can be told to fail."""

    def __init__(self, bucket: str = TEST_BUCKET) -> None:
        self.bucket = bucket
        self.objects: dict[str, StoredObject] = {}
        self.calls: list[tuple[str, str]] = []
        self.put_options: dict[str, dict[str, object]] = {}
        self.failures: dict[str, BaseException] = {}
        self.closed = False

    def fail(self, operation: str, error: BaseException) -> None:
        """Make the next and all later calls of `operation` raise `error`."""
        self.failures[operation] = error

    def _maybe_fail(self, operation: str) -> None:
        error = self.failures.get(operation)
        if error is not None:
            raise error

    async def put_object(
        self,
        path: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str] | None = None,
        *,
        acl: str | None = None,
        expires: datetime | None = None,
    ) -> None:
        self.calls.append(("put", path))
        await asyncio.sleep(0)
        self._maybe_fail("put")
        self.objects[path] = StoredObject(
            body=bytes(body),
            content_type=content_type,
            metadata=dict(metadata or {}),
        )
        self.put_options[path] = {"acl": acl, "expires": expires}

    async def get_object(self, path: str) -> StoredObject:
        self.calls.append(("get", path))
        await asyncio.sleep(0)
        self._maybe_fail("get")
        try:
            return self.objects[path]
        except KeyError:
            raise StorageNotFoundError(path) from None

    async def delete_object(self, path: str) -> None:
        self.calls.append(("delete", path))
        self._maybe_fail("delete")
        self.objects.pop(path, None)

    async def head_bucket(self) -> None:
        self.calls.append(("head_bucket", self.bucket))
        self._maybe_fail("head_bucket")

    async def close(self) -> None:
        self.closed = True

    def count(self, operation: str, path: str | None = None) -> int:
        return sum(
            1 for op, p in self.calls if op == operation and (path is None or p == path)
        )


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep S3_CACHE_* from the developer's environment out of unit tests."""
    for name in list(os.environ):
        if name.upper().startswith("S3_CACHE_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> ConnectionSettings:
    """Valid settings with static credentials and the default ACL."""
    return ConnectionSettings(
        bucket=TEST_BUCKET,
        access_key_id="AKIATESTKEY",
        secret_access_key="test-secret",
        region="us-east-1",
    )


@pytest.fixture
def storage() -> InMemoryObjectStorage:
    return InMemoryObjectStorage()


@pytest.fixture
def connection(
    settings: ConnectionSettings, storage: InMemoryObjectStorage
) -> S3CacheConnection:
    """Unstarted connection wired to the in-memory transport."""
    return S3CacheConnection(settings, storage_factory=lambda s: storage)


@pytest.fixture
async def started_connection(connection: S3CacheConnection) -> S3CacheConnection:
    """Connection that has passed its self-test. Stopped after the test."""
    await connection.start()
    yield connection
    connection.stop()


@pytest.fixture
def s3_settings() -> ConnectionSettings:
    """Settings for a real bucket from S3_CACHE_* env. Skips when not configured.

    Use @pytest.mark.requires_s3 on tests that need this fixture; run without
    S3 via: pytest -m 'not requires_s3'.
    """
    if not _INTEGRATION_ENV.get("bucket"):
        pytest.skip("S3 not configured: set S3_CACHE_BUCKET and credentials")
    return ConnectionSettings(**_INTEGRATION_ENV)


@pytest.fixture
def backend_failure() -> BackendError:
    return BackendError("put", "test/k", RuntimeError("connection reset"))
