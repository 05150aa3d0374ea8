"""Local filesystem storage backend."""

import os
import tempfile

from langcache.logging import get_module_logger
from langcache.storage.base import StorageBackend, StorageError

logger = get_module_logger()


class LocalFileStorage(StorageBackend):
    """StorageBackend backed by the local filesystem.

    Writes go to a temporary file in the target directory which is then
    renamed over the target, so concurrent readers see either the old or
    the new file.

    Attributes:
        file_mode: Permission bits applied to written files.
    """

    def __init__(self, file_mode: int = 0o644):
        self.file_mode = file_mode

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(path)

    def read(self, path: str) -> bytes:
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise StorageError(
                f"Could not read '{path}': {e}", path=path, operation="read"
            ) from e

    def write(self, path: str, data: bytes) -> None:
        directory = os.path.dirname(path) or "."
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=directory, prefix=".tmp_", suffix=".part"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.chmod(tmp_path, self.file_mode)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(
                f"Could not write '{path}': {e}", path=path, operation="write"
            ) from e
        logger.debug("wrote_file", path=path, size=len(data))

    def last_modified(self, path: str) -> float:
        try:
            return os.stat(path).st_mtime
        except OSError as e:
            raise StorageError(
                f"Could not stat '{path}': {e}", path=path, operation="last_modified"
            ) from e

    def create_directory(self, path: str) -> None:
        try:
            os.makedirs(path, mode=0o755, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"Could not create directory '{path}': {e}",
                path=path,
                operation="create_directory",
            ) from e
        logger.debug("created_directory", path=path)
