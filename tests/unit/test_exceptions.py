"""Tests for s3cache exceptions (error_code, message, details)."""

import pytest

from s3cache.domain.exceptions import (
    ConfigError,
    InvalidKeyError,
    InvalidSegmentNameError,
    InvalidTTLError,
    NotStartedError,
    S3CacheException,
    SerializationError,
    ValidationException,
)
from s3cache.infrastructure.exceptions import (
    BackendError,
    SelfTestError,
    StorageNotFoundError,
)


def test_base_exception_default_error_code() -> None:
    """Base S3CacheException uses class name as error_code when not provided."""
    exc = S3CacheException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "S3CacheException"
    assert exc.details == {}


def test_base_exception_custom_error_code_and_details() -> None:
    exc = S3CacheException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.error_code == "CUSTOM"
    assert exc.details == {"key": "value"}
    assert str(exc) == "Oops"


def test_config_error() -> None:
    exc = ConfigError("Invalid S3 bucket value", [{"msg": "x"}])
    assert exc.error_code == "CONFIG_ERROR"
    assert exc.details == {"errors": [{"msg": "x"}]}


def test_not_started_error_default_message() -> None:
    exc = NotStartedError()
    assert exc.message == "Connection not started"
    assert exc.error_code == "NOT_STARTED"


def test_invalid_key_error_is_validation_exception() -> None:
    exc = InvalidKeyError("Invalid key: missing segment", "segment")
    assert isinstance(exc, ValidationException)
    assert exc.error_code == "INVALID_KEY"
    assert exc.details == {"field": "segment"}


def test_invalid_segment_name_error() -> None:
    exc = InvalidSegmentNameError("Empty string")
    assert exc.error_code == "INVALID_SEGMENT_NAME"
    assert exc.details == {"field": "segment"}


def test_invalid_ttl_error() -> None:
    exc = InvalidTTLError("soon")
    assert exc.message == "Invalid ttl value: 'soon'"
    assert exc.error_code == "INVALID_TTL"


def test_serialization_error_reason() -> None:
    exc = SerializationError("Could not convert object to JSON", "Circular reference detected")
    assert exc.error_code == "SERIALIZATION_ERROR"
    assert exc.details == {"reason": "Circular reference detected"}


def test_backend_error_keeps_original() -> None:
    original = RuntimeError("connection reset")
    exc = BackendError("put", "test/k", original)
    assert exc.original is original
    assert exc.operation == "put"
    assert exc.path == "test/k"
    assert exc.error_code == "BACKEND_ERROR"
    assert exc.message == "Storage put failed test/k: connection reset"
    assert exc.details["reason"] == "connection reset"


def test_storage_not_found_is_backend_error() -> None:
    exc = StorageNotFoundError("test/k")
    assert isinstance(exc, BackendError)
    assert exc.error_code == "STORAGE_NOT_FOUND"
    assert str(exc) == "Object not found: test/k"


def test_self_test_error_names_bucket() -> None:
    exc = SelfTestError("my-bucket", "error writing to bucket: denied")
    assert exc.bucket == "my-bucket"
    assert "my-bucket" in exc.message
    assert exc.error_code == "SELF_TEST_FAILED"


@pytest.mark.parametrize(
    "exc",
    [
        ConfigError("x"),
        NotStartedError(),
        InvalidKeyError(),
        SerializationError("x"),
        BackendError("get", None),
        SelfTestError("b", "r"),
    ],
)
def test_all_errors_share_base(exc: Exception) -> None:
    assert isinstance(exc, S3CacheException)
