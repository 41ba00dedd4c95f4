"""S3-compatible object storage (AWS S3, MinIO, etc.) for cache envelopes."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from s3cache.infrastructure.exceptions import BackendError, StorageNotFoundError
from s3cache.infrastructure.external.storage.protocol import StoredObject

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchObject", "404", "NotFound"})


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3ObjectStorage:
    """Whole-object storage on one S3 bucket.

    Uses boto3 (sync) via asyncio.to_thread for async API. Compatible with
    AWS S3, MinIO, DigitalOcean Spaces. The client is built with a single
    attempt so that failures surface to the caller immediately.
    """

    def __init__(
        self,
        bucket: str,
        region: str | None = None,
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        signature_version: str | None = None,
        path_style: bool = False,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            signature_version: Optional signer, e.g. "s3v4".
            path_style: Use path-style addressing instead of virtual hosts.
        """
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        config_kwargs: dict[str, Any] = {
            "retries": {"max_attempts": 1, "mode": "standard"},
        }
        if signature_version:
            config_kwargs["signature_version"] = signature_version
        if path_style:
            config_kwargs["s3"] = {"addressing_style": "path"}
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            config=Config(**config_kwargs),
            **extra,
        )

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
        """Write the whole object with content type, user metadata and optional ACL."""
        kwargs: dict[str, Any] = {
            "Bucket": self.bucket,
            "Key": path,
            "Body": body,
            "ContentType": content_type,
        }
        if metadata:
            # S3 metadata keys and values must be strings
            kwargs["Metadata"] = {str(k): str(v) for k, v in metadata.items()}
        if acl:
            kwargs["ACL"] = acl
        if expires is not None:
            kwargs["Expires"] = expires

        try:
            await asyncio.to_thread(lambda: self._client.put_object(**kwargs))
        except (ClientError, BotoCoreError) as e:
            raise BackendError("put", path, e) from e

    async def get_object(self, path: str) -> StoredObject:
        """Read body, content type and metadata. Raises StorageNotFoundError if missing."""
        def _get() -> StoredObject:
            resp = self._client.get_object(Bucket=self.bucket, Key=path)
            return StoredObject(
                body=resp["Body"].read(),
                content_type=resp.get("ContentType"),
                metadata=dict(resp.get("Metadata") or {}),
            )

        try:
            return await asyncio.to_thread(_get)
        except ClientError as e:
            if _error_code(e) in _NOT_FOUND_CODES:
                raise StorageNotFoundError(path, e) from e
            raise BackendError("get", path, e) from e
        except BotoCoreError as e:
            raise BackendError("get", path, e) from e

    async def delete_object(self, path: str) -> None:
        """Delete object. S3 reports success for missing keys; so do we."""
        try:
            await asyncio.to_thread(
                self._client.delete_object, Bucket=self.bucket, Key=path
            )
        except ClientError as e:
            if _error_code(e) in _NOT_FOUND_CODES:
                return
            raise BackendError("delete", path, e) from e
        except BotoCoreError as e:
            raise BackendError("delete", path, e) from e

    async def head_bucket(self) -> None:
        """Check that the bucket exists and the credentials can reach it."""
        try:
            await asyncio.to_thread(self._client.head_bucket, Bucket=self.bucket)
        except (ClientError, BotoCoreError) as e:
            raise BackendError("head_bucket", self.bucket, e) from e

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await asyncio.to_thread(self._client.close)
