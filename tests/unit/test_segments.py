"""Tests for segment name validation."""

import pytest

from s3cache.domain.exceptions import InvalidSegmentNameError
from s3cache.infrastructure.cache.segments import validate_segment_name


@pytest.mark.parametrize("name", ["", None])
def test_empty_name(name: str | None) -> None:
    error = validate_segment_name(name)
    assert isinstance(error, InvalidSegmentNameError)
    assert error.message == "Empty string"


def test_null_character() -> None:
    error = validate_segment_name("a\0b")
    assert error is not None
    assert error.message == "Includes null character"


@pytest.mark.parametrize("name", ["ab", "a", "x" * 64, "x" * 100])
def test_length_out_of_range(name: str) -> None:
    error = validate_segment_name(name)
    assert error is not None
    assert error.message == "Must be between 3 and 63 characters"


@pytest.mark.parametrize("name", ["valid", "abc", "x" * 63, "with/slash"])
def test_valid_names(name: str) -> None:
    assert validate_segment_name(name) is None


def test_error_is_returned_not_raised() -> None:
    error = validate_segment_name("ab")
    assert isinstance(error, Exception)
    assert error.error_code == "INVALID_SEGMENT_NAME"
    assert error.details == {"field": "segment"}
