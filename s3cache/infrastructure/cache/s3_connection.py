"""S3-backed cache connection.

Emulates a key/value cache with TTLs on an object store that only offers
whole-object PUT/GET/DELETE and per-object metadata. Keys become object
paths (keys.py), values become typed payloads (codec.py) and expiry is
evaluated on read from stored-at/ttl metadata (ttl.py). Nothing is retried
here; the caller owns retry policy.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Callable, Mapping
from datetime import datetime
from types import TracebackType
from typing import Any

from pydantic import ValidationError

from s3cache.core.config import ConnectionSettings
from s3cache.core.constants import (
    ACCESS_TEST_BODY,
    ACCESS_TEST_ID,
    ACCESS_TEST_SEGMENT,
    CONTENT_TYPE_TEXT,
)
from s3cache.domain.exceptions import (
    ConfigError,
    InvalidSegmentNameError,
    InvalidTTLError,
    NotStartedError,
    S3CacheException,
)
from s3cache.domain.value_objects import CachedItem, CacheKey
from s3cache.infrastructure.cache.codec import decode_value, encode_value
from s3cache.infrastructure.cache.keys import storage_path_for_key
from s3cache.infrastructure.cache.segments import validate_segment_name
from s3cache.infrastructure.cache.ttl import (
    build_ttl_metadata,
    expiry_hint,
    remaining_ttl,
)
from s3cache.infrastructure.exceptions import (
    BackendError,
    SelfTestError,
    StorageNotFoundError,
)
from s3cache.infrastructure.external.storage import (
    ObjectStorageProtocol,
    StorageFactory,
)
from s3cache.shared.telemetry import get_logger, setup_logging
from s3cache.shared.utils.datetime import utc_now

logger = get_logger(__name__)

StorageClientFactory = Callable[[ConnectionSettings], ObjectStorageProtocol]


def _load_settings(
    settings: ConnectionSettings | Mapping[str, Any] | None,
    options: dict[str, Any],
) -> ConnectionSettings:
    """Build validated settings from an instance, a mapping and/or keyword options."""
    if isinstance(settings, ConnectionSettings) and not options:
        return settings
    values: dict[str, Any] = {}
    if isinstance(settings, ConnectionSettings):
        values.update(settings.model_dump())
    elif settings is not None:
        values.update(settings)
    values.update(options)
    try:
        return ConnectionSettings(**values)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        message = "; ".join(str(err.get("msg", "")) for err in errors) or str(e)
        raise ConfigError(message, errors) from e


def _is_finite_ttl(ttl: Any) -> bool:
    if isinstance(ttl, bool) or not isinstance(ttl, (int, float)):
        return False
    try:
        return math.isfinite(ttl)
    except OverflowError:
        # int too large to convert to float
        return False


class S3CacheConnection:
    """Cache connection on one S3 bucket.

    Lifecycle: construct (validates settings, raises ConfigError), await
    start() (builds the storage client and runs a write/read self-test),
    then get/set/drop. stop() releases the client. Also usable as an async
    context manager.
    """

    def __init__(
        self,
        settings: ConnectionSettings | Mapping[str, Any] | None = None,
        *,
        storage_factory: StorageClientFactory | None = None,
        clock: Callable[[], datetime] | None = None,
        **options: Any,
    ) -> None:
        """Initialize the connection. Does no I/O.

        Args:
            settings: ConnectionSettings, or a mapping of setting values.
                When None, settings are read from S3_CACHE_* env / .env.
            storage_factory: Builds the transport from settings; defaults to
                StorageFactory.create_storage_client (boto3). Injected in tests.
            clock: Returns the current UTC time; defaults to utc_now.
            **options: Setting values overriding those in `settings`.

        Raises:
            ConfigError: Bucket or credentials missing/invalid.
        """
        self.settings = _load_settings(settings, options)
        setup_logging(self.settings)
        self._storage_factory = storage_factory or StorageFactory.create_storage_client
        self._clock = clock or utc_now
        self.client: ObjectStorageProtocol | None = None
        self._connected = False
        self._start_task: asyncio.Future[None] | None = None
        self._generation = 0
        self._closing: set[asyncio.Task[None]] = set()

    async def __aenter__(self) -> "S3CacheConnection":
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        client = self._release()
        if client is not None:
            await self._close_client(client)

    # ---- Lifecycle ----

    async def start(self) -> None:
        """Connect and run the bucket access self-test.

        Returns immediately when already ready. Concurrent callers share one
        in-flight start and observe its single outcome.

        Raises:
            SelfTestError: The sentinel write/read failed; connection stays not ready.
        """
        if self._connected:
            return
        if self._start_task is None:
            self._start_task = asyncio.ensure_future(self._connect(self._generation))
        task = self._start_task
        try:
            await asyncio.shield(task)
        finally:
            if task.done() and self._start_task is task:
                self._start_task = None

    async def _connect(self, generation: int) -> None:
        bucket = self.settings.bucket
        try:
            client = self._storage_factory(self.settings)
        except Exception as e:
            logger.warning("S3 cache client creation failed for bucket %s: %s", bucket, e)
            raise SelfTestError(bucket, f"client creation failed: {e}") from e

        try:
            await self._test_bucket_access(client)
        except SelfTestError as e:
            logger.warning("S3 cache self-test failed: %s", e.message)
            await self._close_client(client)
            raise

        if generation != self._generation:
            # stop() ran while the self-test was in flight
            logger.info("S3 cache start superseded by stop for bucket %s", bucket)
            await self._close_client(client)
            return

        self.client = client
        self._connected = True
        logger.info("S3 cache connected: bucket=%s", bucket)

    async def _test_bucket_access(self, client: ObjectStorageProtocol) -> None:
        """Write the sentinel object, read it back and compare."""
        bucket = self.settings.bucket
        path = storage_path_for_key(CacheKey(ACCESS_TEST_SEGMENT, ACCESS_TEST_ID))
        try:
            await client.put_object(
                path,
                ACCESS_TEST_BODY,
                CONTENT_TYPE_TEXT,
                acl=self.settings.object_acl,
            )
        except Exception as e:
            raise SelfTestError(bucket, f"error writing to bucket: {e}") from e

        try:
            stored = await client.get_object(path)
        except Exception as e:
            raise SelfTestError(bucket, f"error reading from bucket: {e}") from e

        if stored.body != ACCESS_TEST_BODY:
            raise SelfTestError(bucket, "read-back content does not match what was written")

    def stop(self) -> None:
        """Release the client and mark not ready. Safe to call repeatedly or before start."""
        client = self._release()
        if client is None:
            return
        logger.info("S3 cache disconnected: bucket=%s", self.settings.bucket)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop to close on; the client is dropped with its last reference.
            return
        task = loop.create_task(self._close_client(client))
        self._closing.add(task)
        task.add_done_callback(self._closing.discard)

    def _release(self) -> ObjectStorageProtocol | None:
        client = self.client
        self.client = None
        self._connected = False
        self._generation += 1
        # An in-flight start now belongs to the old generation; the next start() schedules its own.
        self._start_task = None
        return client

    async def _close_client(self, client: ObjectStorageProtocol) -> None:
        try:
            await client.close()
        except Exception:
            logger.warning("S3 cache client close failed", exc_info=True)

    def is_ready(self) -> bool:
        """Return True if start() succeeded and stop() has not been called since."""
        return self._connected

    def validate_segment_name(self, name: str) -> InvalidSegmentNameError | None:
        """Return an error if the segment name is unusable, else None."""
        return validate_segment_name(name)

    # ---- Operations ----

    def _require_client(self) -> ObjectStorageProtocol:
        client = self.client
        if not self._connected or client is None:
            raise NotStartedError()
        return client

    async def get(self, key: CacheKey | Mapping[str, Any] | None) -> CachedItem | None:
        """Return the cached item, or None when missing or expired.

        Raises:
            NotStartedError: start() has not succeeded.
            InvalidKeyError: key is None or missing segment/id.
            BackendError: The transport failed (not-found is a miss, not an error).
        """
        client = self._require_client()
        path = storage_path_for_key(key)

        try:
            stored = await client.get_object(path)
        except StorageNotFoundError:
            logger.debug("Cache MISS: %s", path)
            return None
        except S3CacheException:
            raise
        except Exception as e:
            raise BackendError("get", path, e) from e

        state = remaining_ttl(stored.metadata, self._clock())
        if state.expired:
            logger.debug("Cache EXPIRED: %s", path)
            return None

        logger.debug("Cache HIT: %s", path)
        return CachedItem(
            item=decode_value(stored.content_type, stored.body),
            stored=state.stored,
            ttl=math.ceil(state.remaining_ms),
        )

    async def set(
        self,
        key: CacheKey | Mapping[str, Any] | None,
        value: Any,
        ttl: int | float,
    ) -> None:
        """Store value under key for ttl milliseconds.

        A ttl of zero or less is accepted and reads back as expired.

        Raises:
            NotStartedError: start() has not succeeded.
            InvalidKeyError: key is None or missing segment/id.
            InvalidTTLError: ttl is not a finite number.
            SerializationError: value cannot be encoded; nothing is written.
            BackendError: The transport failed.
        """
        client = self._require_client()
        path = storage_path_for_key(key)
        if not _is_finite_ttl(ttl):
            raise InvalidTTLError(ttl)

        encoded = encode_value(value)
        now = self._clock()

        try:
            await client.put_object(
                path,
                encoded.body,
                encoded.content_type,
                build_ttl_metadata(ttl, now),
                acl=self.settings.object_acl,
                expires=expiry_hint(ttl, now),
            )
        except S3CacheException:
            raise
        except Exception as e:
            raise BackendError("put", path, e) from e
        logger.debug("Cache SET: %s (TTL: %sms, %s)", path, ttl, encoded.content_type)

    async def drop(self, key: CacheKey | Mapping[str, Any] | None) -> None:
        """Delete the entry. Missing entries and segments are not an error.

        Raises:
            NotStartedError: start() has not succeeded.
            InvalidKeyError: key is None or missing segment/id.
            BackendError: The transport failed.
        """
        client = self._require_client()
        path = storage_path_for_key(key)

        try:
            await client.delete_object(path)
        except StorageNotFoundError:
            pass
        except S3CacheException:
            raise
        except Exception as e:
            raise BackendError("delete", path, e) from e
        logger.debug("Cache DELETE: %s", path)
