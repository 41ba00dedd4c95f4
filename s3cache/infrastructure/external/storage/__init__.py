"""Storage: S3-compatible object storage transport.

Factory creates the transport from s3cache.core.config. The boto3-backed
implementation is loaded lazily inside StorageFactory.create_storage_client()
so callers that inject their own transport never import boto3.

Implementations implement ObjectStorageProtocol (put_object, get_object,
delete_object, head_bucket, close).
"""

from s3cache.infrastructure.external.storage.factory import StorageFactory
from s3cache.infrastructure.external.storage.protocol import (
    ObjectStorageProtocol,
    StoredObject,
)

__all__ = [
    "ObjectStorageProtocol",
    "StorageFactory",
    "StoredObject",
]
