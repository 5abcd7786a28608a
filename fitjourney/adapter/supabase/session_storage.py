"""Local persistence for the auth session.

Mirrors the key/value storage the Supabase clients use on devices: one JSON
document per key, so a signed-in client survives restarts.
"""

import asyncio
import json
from pathlib import Path
from typing import Any

from fitjourney.domain.service.session_service import SessionStorage
from fitjourney.util.logging import get_logger

logger = get_logger(__name__)


class FileSessionStorage(SessionStorage):
    """Stores each key as `<directory>/<key>.json`."""

    def __init__(self, directory: Path) -> None:
        """Initialize file storage.

        Args:
            directory: Directory holding the stored documents
        """
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    async def load(self, key: str) -> dict[str, Any] | None:
        """Read the document stored under `key`."""
        return await asyncio.to_thread(self._read, self._path(key))

    async def save(self, key: str, value: dict[str, Any]) -> None:
        """Write `value` under `key` atomically."""
        await asyncio.to_thread(self._write, self._path(key), value)

    async def remove(self, key: str) -> None:
        """Delete the document stored under `key`."""
        await asyncio.to_thread(self._path(key).unlink, missing_ok=True)

    @staticmethod
    def _read(path: Path) -> dict[str, Any] | None:
        if not path.exists():
            return None
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed session document at {path}")
            return None
        return data

    def _write(self, path: Path, value: dict[str, Any]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(value), encoding="utf-8")
        tmp.replace(path)


class InMemorySessionStorage(SessionStorage):
    """In-memory session storage for testing."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    async def load(self, key: str) -> dict[str, Any] | None:
        """Return a copy of the stored document."""
        raw = self._values.get(key)
        return json.loads(raw) if raw is not None else None

    async def save(self, key: str, value: dict[str, Any]) -> None:
        """Store a serialised copy of `value`."""
        self._values[key] = json.dumps(value)

    async def remove(self, key: str) -> None:
        """Forget `key`."""
        self._values.pop(key, None)
