"""Storage backends used to read translation sources and persist artifacts.

Main components:
- base: StorageBackend interface and StorageError
- local: LocalFileStorage for the local filesystem
- memory: InMemoryStorage for tests and embedded sources
"""

from langcache.storage.base import StorageBackend, StorageError
from langcache.storage.local import LocalFileStorage
from langcache.storage.memory import InMemoryStorage

__all__ = [
    "StorageBackend",
    "StorageError",
    "LocalFileStorage",
    "InMemoryStorage",
]
