"""Object storage transport protocol (DIP). Implementation: S3ObjectStorage."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class StoredObject:
    """Body, content type and user metadata of one stored object."""

    body: bytes
    content_type: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)


class ObjectStorageProtocol(Protocol):
    """Whole-object PUT/GET/DELETE against a single bucket.

    Implementations raise StorageNotFoundError from get_object when the
    object does not exist, and BackendError for any other failure.
    """

    bucket: str

    async def put_object(
        self,
        path: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str] | None = None,
        *,
        acl: str | None = None,
        expires: datetime | None = None,
    ) -> None:
        """Write the whole object, replacing any existing one."""
        ...

    async def get_object(self, path: str) -> StoredObject:
        """Read the whole object with its content type and metadata."""
        ...

    async def delete_object(self, path: str) -> None:
        """Delete the object. Missing objects are not an error."""
        ...

    async def head_bucket(self) -> None:
        """Check that the bucket exists and is reachable."""
        ...

    async def close(self) -> None:
        """Release network resources held by the client."""
        ...
