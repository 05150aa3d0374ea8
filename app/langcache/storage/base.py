"""Storage backend interface.

The translation pipeline never touches the filesystem directly. Every
existence check, read, write and timestamp query goes through a
StorageBackend so the cache can live anywhere a backend can reach.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """Raised when a storage backend operation fails.

    Attributes:
        path: Path the failed operation was working on.
        operation: Name of the failed operation (read, write, ...).
    """

    def __init__(self, message: str, path: str, operation: Optional[str] = None):
        super().__init__(message)
        self.path = path
        self.operation = operation


class StorageBackend(ABC):
    """Abstract base for storage backends."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if a file exists at path."""
        pass

    @abstractmethod
    def is_directory(self, path: str) -> bool:
        """Return True if path is an existing directory."""
        pass

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Read the full contents of a file.

        Raises:
            StorageError: If the file cannot be read.
        """
        pass

    @abstractmethod
    def write(self, path: str, data: bytes) -> None:
        """Replace the contents of a file.

        Readers must see either the old or the new contents, never a
        partially written file.

        Raises:
            StorageError: If the file cannot be written.
        """
        pass

    @abstractmethod
    def last_modified(self, path: str) -> float:
        """Return the modification time of a file as a POSIX timestamp.

        Raises:
            StorageError: If the file does not exist or cannot be inspected.
        """
        pass

    @abstractmethod
    def create_directory(self, path: str) -> None:
        """Create a directory and any missing parents.

        Raises:
            StorageError: If the directory cannot be created.
        """
        pass
