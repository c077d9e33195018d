"""Blob storage backends for the response cache.

``DirectoryBlobStorage`` keeps one file per key under a directory and does
all I/O through aiofiles, so cache reads and writes never block the event
loop. ``MemoryBlobStorage`` is a dict-backed stand-in for tests and for
throwaway caches.
"""

import contextlib
import uuid
from pathlib import Path

import aiofiles
import aiofiles.os

from promptvault.cache.base import BlobStorage


def _validate_key(key: str) -> None:
    """Reject keys that could escape the storage directory.

    Raises:
        ValueError: If key is empty or contains path components.
    """
    if not key:
        raise ValueError("Invalid key: must not be empty.")
    if "/" in key or "\\" in key or ".." in key:
        raise ValueError(
            f"Invalid key '{key}': path separators and '..' are not allowed."
        )


class DirectoryBlobStorage(BlobStorage):
    """Filesystem-backed blob storage, one file per key.

    Storage structure:
        {directory}/
            ├── {key}{suffix}
            └── ...
    """

    def __init__(self, directory: Path | str, suffix: str = ".json") -> None:
        """Initialise directory storage.

        Args:
            directory: Root directory for blobs. Created on first write.
            suffix: File extension appended to every key.
        """
        self._directory = Path(directory)
        self._suffix = suffix

    @property
    def directory(self) -> Path:
        """The directory holding the blobs."""
        return self._directory

    def path_for(self, key: str) -> Path:
        """Map a key to its file path."""
        _validate_key(key)
        return self._directory / f"{key}{self._suffix}"

    async def exists(self, key: str) -> bool:
        return await aiofiles.os.path.isfile(self.path_for(key))

    async def read(self, key: str) -> bytes:
        async with aiofiles.open(self.path_for(key), "rb") as f:
            return await f.read()

    async def write(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        await aiofiles.os.makedirs(self._directory, exist_ok=True)

        # Write-then-rename so readers never see a half-written file
        tmp_path = path.with_name(f".{key}.{uuid.uuid4().hex}.tmp")
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.replace(tmp_path, path)
        except BaseException:
            # Temp files are hidden from keys(), so nothing else would remove them
            with contextlib.suppress(FileNotFoundError):
                await aiofiles.os.remove(tmp_path)
            raise

    async def delete(self, key: str) -> bool:
        try:
            await aiofiles.os.remove(self.path_for(key))
        except FileNotFoundError:
            return False
        return True

    async def keys(self) -> list[str]:
        if not await aiofiles.os.path.isdir(self._directory):
            return []

        names = await aiofiles.os.listdir(self._directory)
        return sorted(
            name[: -len(self._suffix)] if self._suffix else name
            for name in names
            if name.endswith(self._suffix) and not name.startswith(".")
        )

    def __repr__(self) -> str:
        return f"DirectoryBlobStorage(directory={str(self._directory)!r})"


class MemoryBlobStorage(BlobStorage):
    """In-memory blob storage."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}

    async def exists(self, key: str) -> bool:
        return key in self._blobs

    async def read(self, key: str) -> bytes:
        try:
            return self._blobs[key]
        except KeyError:
            raise FileNotFoundError(key) from None

    async def write(self, key: str, data: bytes) -> None:
        _validate_key(key)
        self._blobs[key] = bytes(data)

    async def delete(self, key: str) -> bool:
        return self._blobs.pop(key, None) is not None

    async def keys(self) -> list[str]:
        return sorted(self._blobs)

    def __repr__(self) -> str:
        return f"MemoryBlobStorage(entries={len(self._blobs)})"
