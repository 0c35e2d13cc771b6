"""File storage port for the two-step upload flow.

1. create_upload_target() hands out a short-lived token and upload URL.
2. store() receives the bytes for that token.
The document is then registered with the token: resolve() turns it into
the stored file's location and claim() consumes it, so one upload backs
at most one document. Stored files never claimed are dropped by
purge_unclaimed() once their token's lifetime has passed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class UploadTarget:
    """Where and until when bytes may be uploaded."""

    token: str
    upload_url: str
    expires_at: datetime


@dataclass(frozen=True)
class StoredFile:
    """A file whose bytes have been transferred."""

    token: str
    file_url: str
    size: int
    content_type: str


class FileStorageProtocol(Protocol):
    """Protocol for document file storage."""

    async def create_upload_target(self) -> UploadTarget:
        ...

    async def store(
        self,
        token: str,
        data: bytes,
        content_type: str,
        max_size_mb: int | None = None,
    ) -> StoredFile:
        """Transfer bytes for an upload token.

        Raises:
            InvalidUploadTokenError: If the token is unknown or expired.
            FileTooLargeError: If data exceeds max_size_mb. Nothing is written.
        """
        ...

    async def resolve(self, token: str) -> StoredFile:
        """Return the stored file for a token.

        Raises:
            InvalidUploadTokenError: If nothing was stored for the token,
                or it already backs a document.
        """
        ...

    async def claim(self, token: str) -> StoredFile:
        """Mark a stored file as registered and return it.

        Raises:
            InvalidUploadTokenError: If nothing was stored for the token,
                or it was already claimed.
        """
        ...

    async def read(self, token: str) -> tuple[StoredFile, bytes]:
        """Return the stored file with its bytes.

        Raises:
            InvalidUploadTokenError: If nothing was stored for the token.
        """
        ...

    async def purge_unclaimed(self) -> int:
        """Drop expired tokens and stored files that were never claimed.

        Returns:
            Number of stored files removed.
        """
        ...
