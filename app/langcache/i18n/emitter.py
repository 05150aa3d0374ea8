"""Rendering and persistence of compiled translation artifacts."""

import os
from typing import List, Optional, Sequence

from langcache.i18n.compiler import CompiledEntry, quote_literal
from langcache.i18n.constants import COMPILER_VERSION
from langcache.i18n.exceptions import (
    CacheDirUnavailableError,
    CacheWriteFailedError,
    InvalidIdentifierError,
)
from langcache.i18n.runtime import shadows_module
from langcache.logging import get_module_logger
from langcache.storage import StorageBackend, StorageError
from langcache.validation import is_dotted_name, is_python_name

logger = get_module_logger()

INDENT = "    "


class ArtifactEmitter:
    """Renders compiled entries as a Python module and writes it to storage.

    Attributes:
        storage: Backend the artifacts are written to.
    """

    def __init__(self, storage: StorageBackend):
        self.storage = storage

    def emit(
        self,
        entries: Sequence[CompiledEntry],
        prefix: str,
        namespace: Optional[str] = None,
        *,
        applied_lang: str = "",
        source_path: str = "",
    ) -> bytes:
        """Render the artifact source.

        Args:
            entries: Compiled entries, in the order they are written.
            prefix: Name of the generated class.
            namespace: Optional module name recorded in the artifact.
            applied_lang: Language recorded on the class.
            source_path: Source file recorded on the class.

        Returns:
            UTF-8 encoded module source.

        Raises:
            InvalidIdentifierError: If prefix or namespace is not a valid name.
        """
        validate_prefix(prefix)
        if namespace is not None:
            validate_namespace(namespace)

        lines: List[str] = [
            f"# Generated by {COMPILER_VERSION}. Do not edit.",
            "from langcache.i18n.runtime import CompiledTranslations",
            "",
            f"__namespace__ = {quote_literal(namespace) if namespace else None}",
            "",
            "",
            f"class {prefix}(CompiledTranslations):",
            f"{INDENT}__language__ = {quote_literal(applied_lang)}",
            f"{INDENT}__source__ = {quote_literal(source_path)}",
            "",
        ]
        lines.extend(f"{INDENT}{entry.name} = {entry.literal}" for entry in entries)
        if entries:
            lines.append("")
            lines.append(f"{INDENT}__messages__ = {{")
            lines.extend(
                f"{INDENT * 2}{quote_literal(entry.name)}: {entry.name},"
                for entry in entries
            )
            lines.append(f"{INDENT}}}")
        else:
            lines.append(f"{INDENT}__messages__ = {{}}")
        lines.append("")

        return "\n".join(lines).encode("utf-8")

    def ensure_directory(self, directory: str) -> None:
        """Create the cache directory if it does not exist.

        Raises:
            CacheDirUnavailableError: If the directory cannot be created.
        """
        if not directory or self.storage.is_directory(directory):
            return
        try:
            self.storage.create_directory(directory)
        except StorageError as e:
            logger.error("cache_dir_unavailable", path=directory, error=str(e))
            raise CacheDirUnavailableError(
                f"Could not create cache path '{directory}': {e}", path=directory
            ) from e
        logger.info("created_cache_directory", path=directory)

    def persist(self, cache_path: str, artifact: bytes) -> None:
        """Write an artifact, creating its directory first if needed.

        Raises:
            CacheDirUnavailableError: If the directory cannot be created.
            CacheWriteFailedError: If the artifact cannot be written.
        """
        self.ensure_directory(os.path.dirname(cache_path))
        try:
            self.storage.write(cache_path, artifact)
        except StorageError as e:
            logger.error("cache_write_failed", cache_path=cache_path, error=str(e))
            raise CacheWriteFailedError(
                f"Could not write cache file to path '{cache_path}'. Is it writable? ({e})",
                path=cache_path,
            ) from e
        logger.info("cache_written", cache_path=cache_path, size=len(artifact))


def validate_prefix(prefix: str) -> None:
    """Raise InvalidIdentifierError unless prefix can name the generated class."""
    if not is_python_name(prefix):
        logger.error("invalid_prefix", prefix=prefix)
        raise InvalidIdentifierError(
            f"Cannot use '{prefix}' as the compiled class name because it is "
            "not a valid identifier",
            key=prefix,
        )


def validate_namespace(namespace: str) -> None:
    """Raise InvalidIdentifierError unless namespace is a dotted module name."""
    if not is_dotted_name(namespace):
        logger.error("invalid_namespace", namespace=namespace)
        raise InvalidIdentifierError(
            f"Cannot use '{namespace}' as the artifact namespace because it is "
            "not a dotted module name",
            key=namespace,
        )
    if shadows_module(namespace):
        logger.error("namespace_shadows_module", namespace=namespace)
        raise InvalidIdentifierError(
            f"Cannot use '{namespace}' as the artifact namespace because it "
            "names an importable module",
            key=namespace,
        )
