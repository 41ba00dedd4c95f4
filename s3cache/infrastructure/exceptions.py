"""Infrastructure exceptions for the storage transport and startup check.

Transport errors extend S3CacheException so callers can catch every
connection error through one base class.
"""

from s3cache.domain.exceptions import S3CacheException


class BackendError(S3CacheException):
    """The storage transport failed.

    The transport's own exception is chained as __cause__ and kept on
    ``original``.
    """

    def __init__(
        self,
        operation: str,
        path: str | None,
        original: BaseException | None = None,
        error_code: str = "BACKEND_ERROR",
    ) -> None:
        target = f" {path}" if path else ""
        reason = str(original) if original is not None else "unknown error"
        super().__init__(
            f"Storage {operation} failed{target}: {reason}",
            error_code,
            {"operation": operation, "path": path, "reason": reason},
        )
        self.operation = operation
        self.path = path
        self.original = original


class StorageNotFoundError(BackendError):
    """Object not found in storage. Treated as a miss by get and success by drop."""

    def __init__(self, path: str, original: BaseException | None = None) -> None:
        super().__init__("get", path, original, "STORAGE_NOT_FOUND")
        self.message = f"Object not found: {path}"
        self.args = (self.message,)


class SelfTestError(S3CacheException):
    """Startup write/read access check against the bucket failed."""

    def __init__(self, bucket: str, reason: str) -> None:
        super().__init__(
            f"Error accessing bucket {bucket}: {reason}",
            "SELF_TEST_FAILED",
            {"bucket": bucket, "reason": reason},
        )
        self.bucket = bucket
