"""Local filesystem file storage.

Tokens are random and single-use: bytes can be stored once per token,
before it expires, and the stored file can back one document. Files are
written to <upload_dir>/<token> and exposed as <base_url>/<token>.
Files nobody registers within the token lifetime are deleted on the next
purge, which runs whenever a new upload target is handed out.
"""

from __future__ import annotations

import asyncio
import secrets
from datetime import datetime, timedelta, timezone
from pathlib import Path

from structlog import get_logger

from casework.application.ports.file_storage import StoredFile, UploadTarget
from casework.domain.errors.document import FileTooLargeError, InvalidUploadTokenError

logger = get_logger()

ALREADY_USED = "Upload token has already been used"
NOT_UPLOADED = "No file was uploaded for this token"


class LocalFileStorage:
    """Stores uploaded bytes under a directory.

    Attributes:
        _root: Directory files are written to.
        _base_url: Prefix of handed-out file URLs.
        _ttl: Lifetime of an upload token.
        _pending: Tokens waiting for bytes, with their expiry.
        _stored: Files stored so far, by token.
        _unclaimed: Stored files not yet registered, with the time they
            become eligible for deletion.
    """

    def __init__(
        self, upload_dir: str, base_url: str = "/files", ttl_seconds: int = 900
    ) -> None:
        self._root = Path(upload_dir)
        self._base_url = base_url.rstrip("/")
        self._ttl = timedelta(seconds=ttl_seconds)
        self._pending: dict[str, datetime] = {}
        self._stored: dict[str, StoredFile] = {}
        self._unclaimed: dict[str, datetime] = {}
        self._lock = asyncio.Lock()
        self._log = logger.bind(component="local_file_storage")

    async def create_upload_target(self) -> UploadTarget:
        await self.purge_unclaimed()
        token = secrets.token_urlsafe(24)
        expires_at = datetime.now(timezone.utc) + self._ttl
        async with self._lock:
            self._pending[token] = expires_at
        return UploadTarget(
            token=token,
            upload_url=f"/v1/documents/uploads/{token}",
            expires_at=expires_at,
        )

    async def store(
        self,
        token: str,
        data: bytes,
        content_type: str,
        max_size_mb: int | None = None,
    ) -> StoredFile:
        if max_size_mb is not None and len(data) > max_size_mb * 1024 * 1024:
            async with self._lock:
                self._pending.pop(token, None)
            self._log.warning("file_rejected_too_large", size=len(data))
            raise FileTooLargeError(len(data), max_size_mb)

        async with self._lock:
            expires_at = self._pending.pop(token, None)
        if expires_at is None:
            raise InvalidUploadTokenError(token)
        if datetime.now(timezone.utc) > expires_at:
            raise InvalidUploadTokenError(token, "Upload token has expired")

        path = self._root / token
        await asyncio.to_thread(self._write, path, data)
        stored = StoredFile(
            token=token,
            file_url=f"{self._base_url}/{token}",
            size=len(data),
            content_type=content_type,
        )
        async with self._lock:
            self._stored[token] = stored
            self._unclaimed[token] = datetime.now(timezone.utc) + self._ttl
        self._log.info("file_stored", size=len(data), content_type=content_type)
        return stored

    def _write(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    async def resolve(self, token: str) -> StoredFile:
        stored = self._stored.get(token)
        if stored is None:
            raise InvalidUploadTokenError(token, NOT_UPLOADED)
        if token not in self._unclaimed:
            raise InvalidUploadTokenError(token, ALREADY_USED)
        return stored

    async def claim(self, token: str) -> StoredFile:
        async with self._lock:
            stored = self._stored.get(token)
            if stored is None:
                raise InvalidUploadTokenError(token, NOT_UPLOADED)
            if self._unclaimed.pop(token, None) is None:
                raise InvalidUploadTokenError(token, ALREADY_USED)
        return stored

    async def read(self, token: str) -> tuple[StoredFile, bytes]:
        stored = self._stored.get(token)
        if stored is None:
            raise InvalidUploadTokenError(token, NOT_UPLOADED)
        data = await asyncio.to_thread((self._root / token).read_bytes)
        return stored, data

    async def purge_unclaimed(self) -> int:
        now = datetime.now(timezone.utc)
        async with self._lock:
            for token in [t for t, expiry in self._pending.items() if expiry < now]:
                del self._pending[token]
            stale = [t for t, deadline in self._unclaimed.items() if deadline < now]
            for token in stale:
                del self._unclaimed[token]
                del self._stored[token]
        for token in stale:
            await asyncio.to_thread((self._root / token).unlink, missing_ok=True)
        if stale:
            self._log.info("unclaimed_files_purged", count=len(stale))
        return len(stale)
