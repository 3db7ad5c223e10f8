"""
Key/value storage backends.

The store and the auth session persist their state as JSON strings under
a small set of keys. Two backends are provided:
- JsonFileStorage: one file per key inside a data directory, survives restarts
- MemoryStorage: process-local dict, used for tests and throwaway runs
"""

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from .config import Settings

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStorage(Protocol):
    """Synchronous string storage keyed by name."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key was never set."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        ...


class MemoryStorage:
    """Dict-backed storage."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class JsonFileStorage:
    """
    File-backed storage, one ``<key>.json`` file per key.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so a reader never sees a half-written file.
    """

    def __init__(self, directory: Path):
        self._directory = Path(directory)
        self._lock = threading.Lock()

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        with self._lock:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{key}.", suffix=".tmp", dir=self._directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                # Never leave temp files behind on a failed write
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise

    def delete(self, key: str) -> None:
        path = self._path(key)
        with self._lock:
            try:
                path.unlink()
            except FileNotFoundError:
                pass


def create_storage(settings: Settings) -> KeyValueStorage:
    """
    Build the storage backend selected by configuration.

    Args:
        settings: Application settings (STORAGE_BACKEND, DATA_DIR)

    Returns:
        A KeyValueStorage implementation
    """
    if settings.storage_backend == "memory":
        logger.info("Using in-memory storage; data will not survive a restart")
        return MemoryStorage()

    logger.info(f"Using file storage at {settings.data_dir}")
    return JsonFileStorage(settings.data_dir)
