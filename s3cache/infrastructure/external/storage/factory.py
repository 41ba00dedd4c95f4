"""Storage client factory: creates the S3 transport from connection settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from s3cache.infrastructure.external.storage.protocol import ObjectStorageProtocol

if TYPE_CHECKING:
    from s3cache.core.config import ConnectionSettings


class StorageFactory:
    """Factory for storage transport instances based on configuration."""

    @staticmethod
    def create_storage_client(
        settings: "ConnectionSettings | None" = None,
    ) -> ObjectStorageProtocol:
        """Create the S3 transport from settings.

        Args:
            settings: Connection settings; if None, uses get_settings().

        Returns:
            S3ObjectStorage bound to settings.bucket.

        Raises:
            ValueError: Missing bucket.
        """
        from s3cache.core.config import get_settings

        s = settings or get_settings()
        if not s.bucket:
            raise ValueError("S3 bucket required for s3 backend")

        from s3cache.infrastructure.external.storage.s3_storage import S3ObjectStorage

        secret = s.secret_access_key.get_secret_value() if s.secret_access_key else None
        if s.ambient_credentials and not (s.access_key_id and secret):
            access_key, secret_key = None, None
        else:
            access_key, secret_key = s.access_key_id, secret
        return S3ObjectStorage(
            bucket=s.bucket,
            region=s.region,
            endpoint_url=s.endpoint,
            access_key=access_key,
            secret_key=secret_key,
            signature_version=s.signature_version,
            path_style=s.path_style,
        )
