"""In-memory storage backend."""

import posixpath
import threading
import time
from typing import Callable, Dict, Optional, Set, Tuple

from langcache.storage.base import StorageBackend, StorageError


class InMemoryStorage(StorageBackend):
    """In-memory implementation of StorageBackend.

    Suitable for tests and for embedding translation sources that never
    touch a disk. Paths are normalized POSIX-style; parent directories of
    written files are created implicitly.

    Attributes:
        clock: Callable returning the timestamp recorded on each write.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._files: Dict[str, Tuple[bytes, float]] = {}
        self._directories: Set[str] = set()
        self._lock = threading.Lock()
        self.clock = clock or time.time

    @staticmethod
    def _normalize(path: str) -> str:
        return posixpath.normpath(path.replace("\\", "/"))

    def exists(self, path: str) -> bool:
        return self._normalize(path) in self._files

    def is_directory(self, path: str) -> bool:
        return self._normalize(path) in self._directories

    def read(self, path: str) -> bytes:
        with self._lock:
            entry = self._files.get(self._normalize(path))
        if entry is None:
            raise StorageError(f"No such file: '{path}'", path=path, operation="read")
        return entry[0]

    def write(self, path: str, data: bytes) -> None:
        key = self._normalize(path)
        with self._lock:
            self._files[key] = (bytes(data), self.clock())
            self._add_parents(key)

    def last_modified(self, path: str) -> float:
        with self._lock:
            entry = self._files.get(self._normalize(path))
        if entry is None:
            raise StorageError(
                f"No such file: '{path}'", path=path, operation="last_modified"
            )
        return entry[1]

    def create_directory(self, path: str) -> None:
        key = self._normalize(path)
        with self._lock:
            self._directories.add(key)
            self._add_parents(key)

    def set_last_modified(self, path: str, timestamp: float) -> None:
        """Override the recorded modification time of an existing file."""
        key = self._normalize(path)
        with self._lock:
            if key not in self._files:
                raise StorageError(
                    f"No such file: '{path}'", path=path, operation="set_last_modified"
                )
            self._files[key] = (self._files[key][0], timestamp)

    def _add_parents(self, key: str) -> None:
        parent = posixpath.dirname(key)
        while parent and parent not in self._directories:
            self._directories.add(parent)
            next_parent = posixpath.dirname(parent)
            if next_parent == parent:
                break
            parent = next_parent
