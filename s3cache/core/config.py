"""Connection configuration (settings and environment).

Single source of truth for connection settings. Uses pydantic-settings
with .env support and the S3_CACHE_ environment prefix. Required fields
(bucket and credentials) are validated at load time; S3CacheConnection
turns validation failures into ConfigError.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from s3cache.core.constants import DEFAULT_ACL


class ConnectionSettings(BaseSettings):
    """Settings for one cache connection, loaded from kwargs, environment and .env.

    Immutable after construction. Credentials may be omitted only when
    ambient_credentials is set, in which case boto3 resolves them from
    its usual chain (env, shared config, instance role).
    """

    # Bucket
    bucket: str = ""

    # Credentials
    access_key_id: str | None = None
    secret_access_key: SecretStr | None = None
    ambient_credentials: bool = False

    # Transport tuning (optional)
    region: str | None = None
    endpoint: str | None = None
    signature_version: str | None = None
    path_style: bool = False

    # Object access control; ACL is only sent when set_acl is True.
    set_acl: bool = True
    acl: str = DEFAULT_ACL

    # Logging
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="S3_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    @model_validator(mode="after")
    def validate_bucket_and_credentials(self) -> "ConnectionSettings":
        """Validate required bucket and credentials.

        - bucket: always required.
        - access_key_id / secret_access_key: required unless ambient_credentials.
        """
        if not self.bucket.strip():
            raise ValueError(
                "Invalid S3 bucket value. Set S3_CACHE_BUCKET or pass bucket=..."
            )
        if self.ambient_credentials:
            return self
        if not self.access_key_id:
            raise ValueError(
                "Invalid S3 access_key_id value. Set S3_CACHE_ACCESS_KEY_ID "
                "or enable ambient_credentials."
            )
        if not self.secret_access_key or not self.secret_access_key.get_secret_value():
            raise ValueError(
                "Invalid S3 secret_access_key value. Set S3_CACHE_SECRET_ACCESS_KEY "
                "or enable ambient_credentials."
            )
        return self

    @property
    def object_acl(self) -> str | None:
        """ACL to attach to written objects, or None when set_acl is off."""
        if not self.set_acl:
            return None
        return self.acl or DEFAULT_ACL


@lru_cache
def get_settings() -> ConnectionSettings:
    """Return cached settings loaded from the environment (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated ConnectionSettings instance.
    """
    return ConnectionSettings()
