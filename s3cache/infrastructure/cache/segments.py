"""Segment name validation."""

from typing import Any

from s3cache.core.constants import SEGMENT_NAME_MAX_LENGTH, SEGMENT_NAME_MIN_LENGTH
from s3cache.domain.exceptions import InvalidSegmentNameError


def validate_segment_name(name: Any) -> InvalidSegmentNameError | None:
    """Return an error describing why `name` is not a usable segment, or None.

    The error is returned, not raised; the caller decides what to do with it.
    """
    if not name:
        return InvalidSegmentNameError("Empty string")
    if "\0" in name:
        return InvalidSegmentNameError("Includes null character")
    if len(name) < SEGMENT_NAME_MIN_LENGTH or len(name) > SEGMENT_NAME_MAX_LENGTH:
        return InvalidSegmentNameError(
            f"Must be between {SEGMENT_NAME_MIN_LENGTH} and "
            f"{SEGMENT_NAME_MAX_LENGTH} characters"
        )
    return None
