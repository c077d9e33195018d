"""Key-value persistence for user-defined templates."""

import contextlib
import copy
import json
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from promptvault.exceptions import TemplateStorageError
from promptvault.utils.logging import get_logger

logger = get_logger(__name__)


class KeyValueStore(ABC):
    """Async store of JSON-compatible values under string keys."""

    @abstractmethod
    async def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default``."""
        pass

    @abstractmethod
    async def update(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""
        pass


class MemoryKeyValueStore(KeyValueStore):
    """In-memory store. Values are deep-copied in and out."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    async def update(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class JsonFileKeyValueStore(KeyValueStore):
    """Store backed by a single JSON document on disk.

    The document is read once, on first access, and rewritten in full on
    every update through a temp file and an atomic rename.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._data: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        return self._path

    async def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data

        if not await aiofiles.os.path.isfile(self._path):
            self._data = {}
            return self._data

        try:
            async with aiofiles.open(self._path, encoding="utf-8") as f:
                raw = await f.read()
            data = json.loads(raw) if raw.strip() else {}
        except (OSError, json.JSONDecodeError) as e:
            raise TemplateStorageError(
                f"Failed to read template state from {self._path}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise TemplateStorageError(
                f"Template state in {self._path} is not a JSON object"
            )
        self._data = data
        return self._data

    async def get(self, key: str, default: Any = None) -> Any:
        data = await self._load()
        if key not in data:
            return default
        return copy.deepcopy(data[key])

    async def update(self, key: str, value: Any) -> None:
        data = {**await self._load(), key: copy.deepcopy(value)}

        tmp_path = self._path.with_name(f".{self._path.name}.{uuid.uuid4().hex}.tmp")
        try:
            await aiofiles.os.makedirs(self._path.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(data, indent=2))
            await aiofiles.os.replace(tmp_path, self._path)
        except BaseException as e:
            with contextlib.suppress(FileNotFoundError):
                await aiofiles.os.remove(tmp_path)
            if isinstance(e, OSError):
                raise TemplateStorageError(
                    f"Failed to write template state to {self._path}: {e}"
                ) from e
            raise
        # Only adopt the new document once it is on disk
        self._data = data
        logger.debug("Saved state", extra={"path": str(self._path), "state_key": key})
