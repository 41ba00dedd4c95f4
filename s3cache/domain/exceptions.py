"""Domain exceptions for the S3 cache connection.

Defines caller-facing errors for configuration, lifecycle, key and value
problems. These exceptions are independent of the storage transport;
transport failures live in s3cache.infrastructure.exceptions.
"""

from typing import Any


class S3CacheException(Exception):
    """Base exception for all s3cache errors.

    All custom exceptions inherit from this class so callers can catch
    every connection error in one place.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, bucket, path).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ConfigError(S3CacheException):
    """Raised at construction when bucket or credentials are missing or invalid."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        details = {"errors": errors} if errors else {}
        super().__init__(message, "CONFIG_ERROR", details)


class NotStartedError(S3CacheException):
    """Raised when get/set/drop is called before a successful start()."""

    def __init__(self, message: str = "Connection not started") -> None:
        super().__init__(message, "NOT_STARTED")


class ValidationException(S3CacheException):
    """Raised when caller input fails validation."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        error_code: str = "VALIDATION_ERROR",
    ) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            error_code: Machine-readable code for subclasses.
        """
        details = {"field": field} if field else {}
        super().__init__(message, error_code, details)


class InvalidKeyError(ValidationException):
    """Key is None or is missing its segment or id."""

    def __init__(self, message: str = "Invalid key", field: str | None = None) -> None:
        super().__init__(message, field, "INVALID_KEY")


class InvalidSegmentNameError(ValidationException):
    """Segment name is empty, has a null character or has a bad length."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "segment", "INVALID_SEGMENT_NAME")


class InvalidTTLError(ValidationException):
    """TTL is not a number of milliseconds."""

    def __init__(self, ttl: Any) -> None:
        super().__init__(f"Invalid ttl value: {ttl!r}", "ttl", "INVALID_TTL")


class SerializationError(S3CacheException):
    """Value cannot be encoded for storage (cyclic structure, unsupported type)."""

    def __init__(self, message: str, reason: str | None = None) -> None:
        details = {"reason": reason} if reason else {}
        super().__init__(message, "SERIALIZATION_ERROR", details)
