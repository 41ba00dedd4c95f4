"""Value codec: runtime values to (content type, bytes) and back.

The content type chosen on write drives decoding on read:

- str / int / float / bool -> text/plain
- dict / list / tuple      -> application/json
- bytes / bytearray / memoryview -> application/octet-stream

Text entries read back as str, so numbers and booleans come back in their
string form ("42", "true").
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from s3cache.core.constants import (
    CONTENT_TYPE_BINARY,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_TEXT,
)
from s3cache.domain.exceptions import SerializationError
from s3cache.shared.telemetry import get_logger

logger = get_logger(__name__)

_TEXT_TYPES = (str, int, float)
_JSON_TYPES = (dict, list, tuple)
_BINARY_TYPES = (bytes, bytearray, memoryview)


@dataclass(frozen=True)
class EncodedValue:
    """Content type and payload ready for the transport."""

    content_type: str
    body: bytes


def _text_form(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_value(value: Any) -> EncodedValue:
    """Classify value by type and encode it.

    Binary payloads are copied so the caller may reuse its buffer.

    Raises:
        SerializationError: Structure is not JSON-serializable (e.g. cyclic),
            or the value type is not supported.
    """
    if isinstance(value, bool) or isinstance(value, _TEXT_TYPES):
        return EncodedValue(CONTENT_TYPE_TEXT, _text_form(value).encode("utf-8"))

    if isinstance(value, _JSON_TYPES):
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError, RecursionError) as e:
            raise SerializationError("Could not convert object to JSON", str(e)) from e
        return EncodedValue(CONTENT_TYPE_JSON, serialized.encode("utf-8"))

    if isinstance(value, _BINARY_TYPES):
        return EncodedValue(CONTENT_TYPE_BINARY, bytes(value))

    raise SerializationError(
        f"Unsupported value type: {type(value).__name__}",
        type(value).__name__,
    )


def _media_type(content_type: str | None) -> str:
    """Media type without parameters (e.g. "; charset=utf-8"), lowercased."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def decode_value(content_type: str | None, body: bytes) -> Any:
    """Decode a stored payload according to its content type.

    Malformed JSON is returned as raw bytes rather than failing the read.
    Invalid UTF-8 in text entries is replaced with U+FFFD.
    """
    media_type = _media_type(content_type)

    if media_type == CONTENT_TYPE_TEXT:
        return body.decode("utf-8", errors="replace")

    if media_type == CONTENT_TYPE_JSON:
        try:
            return json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            logger.warning("Stored JSON payload could not be parsed, returning raw bytes: %s", e)
            return body

    return body
