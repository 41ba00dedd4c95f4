"""Core constants: content types, metadata keys and reserved keys.

Single source of truth for the stored object layout. Metadata key names
are kept compatible with objects written by other catbox S3 clients.
"""

# Content types of stored cache envelopes
CONTENT_TYPE_TEXT = "text/plain"
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_BINARY = "application/octet-stream"

# User metadata keys (S3 returns these lowercased)
METADATA_STORED = "catbox-stored"
METADATA_TTL = "catbox-ttl"
# Date.toString() as written by JavaScript clients, minus the "(zone name)" suffix
JS_DATE_FORMAT = "%a %b %d %Y %H:%M:%S GMT%z"

# Path separator between segment and id
KEY_PATH_SEP = "/"

# Characters that must not reach the storage path verbatim
RESERVED_PATH_CHARS = "?&#%"
RESERVED_PATH_REPLACEMENT = "~"

# Startup self-test sentinel
ACCESS_TEST_SEGMENT = "catbox-s3"
ACCESS_TEST_ID = "accesstest"
ACCESS_TEST_BODY = b"ok"

# Segment name bounds (inclusive)
SEGMENT_NAME_MIN_LENGTH = 3
SEGMENT_NAME_MAX_LENGTH = 63

DEFAULT_ACL = "public-read"
