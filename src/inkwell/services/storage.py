"""Local filesystem storage for uploaded images."""

from __future__ import annotations

import logging
import secrets
from pathlib import Path

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from inkwell.core.settings import settings
from inkwell.db.time import epoch_millis

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class UploadTooLargeError(ValueError):
    """Raised when an upload exceeds the configured size limit."""


class EmptyUploadError(ValueError):
    """Raised when an upload carries no bytes."""


class UploadStorage:
    """Writes uploads under `directory` and maps them to public URLs."""

    def __init__(self, directory: str | Path, url_prefix: str, max_bytes: int) -> None:
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes

    def _filename(self, original: str | None) -> str:
        suffix = Path(original or "").suffix.lower()
        return f"{epoch_millis()}-{secrets.token_hex(6)}{suffix}"

    async def save(self, upload: UploadFile) -> str:
        """Persist `upload` and return its relative URL.

        Raises:
            UploadTooLargeError: If the file exceeds ``max_bytes``.
            EmptyUploadError: If the file is empty.
        """
        await aiofiles.os.makedirs(self.directory, exist_ok=True)
        name = self._filename(upload.filename)
        target = self.directory / name

        written = 0
        too_large = False
        async with aiofiles.open(target, "wb") as fh:
            while chunk := await upload.read(CHUNK_SIZE):
                written += len(chunk)
                if written > self.max_bytes:
                    too_large = True
                    break
                await fh.write(chunk)

        if too_large:
            await aiofiles.os.remove(target)
            raise UploadTooLargeError(f"File too large. Max size: {self.max_bytes} bytes")
        if written == 0:
            await aiofiles.os.remove(target)
            raise EmptyUploadError("No file uploaded")

        logger.info("Stored upload %s (%d bytes)", name, written)
        return f"{self.url_prefix}/{name}"


def get_upload_storage() -> UploadStorage:
    """Return storage configured from settings."""
    return UploadStorage(
        settings.upload_dir,
        settings.upload_url_prefix,
        settings.max_upload_bytes,
    )
