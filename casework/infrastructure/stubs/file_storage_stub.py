"""In-memory file storage stub."""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone

from casework.application.ports.file_storage import StoredFile, UploadTarget
from casework.domain.errors.document import FileTooLargeError, InvalidUploadTokenError


class FileStorageStub:
    """Keeps uploaded bytes in memory.

    Tokens never expire unless ttl_seconds is given.
    """

    def __init__(self, ttl_seconds: int | None = None) -> None:
        self._ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else None
        self._pending: dict[str, datetime | None] = {}
        self._files: dict[str, tuple[StoredFile, bytes]] = {}
        self._unclaimed: dict[str, datetime | None] = {}

    async def create_upload_target(self) -> UploadTarget:
        token = secrets.token_urlsafe(16)
        now = datetime.now(timezone.utc)
        expires_at = now + self._ttl if self._ttl else None
        self._pending[token] = expires_at
        return UploadTarget(
            token=token,
            upload_url=f"/v1/documents/uploads/{token}",
            expires_at=expires_at or now + timedelta(days=1),
        )

    async def store(
        self,
        token: str,
        data: bytes,
        content_type: str,
        max_size_mb: int | None = None,
    ) -> StoredFile:
        if max_size_mb is not None and len(data) > max_size_mb * 1024 * 1024:
            self._pending.pop(token, None)
            raise FileTooLargeError(len(data), max_size_mb)
        if token not in self._pending:
            raise InvalidUploadTokenError(token)
        expires_at = self._pending.pop(token)
        if expires_at is not None and datetime.now(timezone.utc) > expires_at:
            raise InvalidUploadTokenError(token, "Upload token has expired")
        stored = StoredFile(
            token=token,
            file_url=f"memory://{token}",
            size=len(data),
            content_type=content_type,
        )
        self._files[token] = (stored, data)
        self._unclaimed[token] = (
            datetime.now(timezone.utc) + self._ttl if self._ttl else None
        )
        return stored

    async def resolve(self, token: str) -> StoredFile:
        stored, _ = await self.read(token)
        if token not in self._unclaimed:
            raise InvalidUploadTokenError(token, "Upload token has already been used")
        return stored

    async def claim(self, token: str) -> StoredFile:
        stored = await self.resolve(token)
        del self._unclaimed[token]
        return stored

    async def read(self, token: str) -> tuple[StoredFile, bytes]:
        entry = self._files.get(token)
        if entry is None:
            raise InvalidUploadTokenError(token, "No file was uploaded for this token")
        return entry

    async def purge_unclaimed(self) -> int:
        now = datetime.now(timezone.utc)
        for token in [t for t, e in self._pending.items() if e is not None and e < now]:
            del self._pending[token]
        stale = [t for t, e in self._unclaimed.items() if e is not None and e < now]
        for token in stale:
            del self._unclaimed[token]
            del self._files[token]
        return len(stale)

    async def put(
        self, data: bytes, content_type: str = "application/pdf"
    ) -> StoredFile:
        """Create a token and store bytes in one call (for tests)."""
        target = await self.create_upload_target()
        return await self.store(target.token, data, content_type)

    def clear(self) -> None:
        self._pending.clear()
        self._files.clear()
        self._unclaimed.clear()
