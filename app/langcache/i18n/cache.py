"""Cache artifact naming and validity checks."""

import hashlib
import os
from typing import Optional

from langcache.i18n.constants import COMPILER_VERSION, DEFAULT_SECTION_SEPARATOR
from langcache.i18n.exceptions import CacheLoadError, SourceUnavailableError
from langcache.logging import get_module_logger
from langcache.storage import StorageBackend, StorageError

logger = get_module_logger()


class CacheKeyBuilder:
    """Build deterministic cache artifact names.

    The digest covers the absolute source path, the compiler version, the
    namespace, the section separator and the merge flag; prefix and applied
    language are appended in clear text. Changing any of them yields a
    different artifact.

    Example:
        >>> builder = CacheKeyBuilder()
        >>> builder.build("lang/de.yml", prefix="L", applied_lang="de")
        'i18n_3f5a..._L_de.py'
    """

    def __init__(self, compiler_version: str = COMPILER_VERSION):
        self.compiler_version = compiler_version

    def digest(
        self,
        source_path: str,
        namespace: Optional[str] = None,
        section_separator: str = DEFAULT_SECTION_SEPARATOR,
        merge_fallback: bool = False,
    ) -> str:
        key_string = "|".join(
            [
                os.path.abspath(source_path),
                self.compiler_version,
                namespace or "",
                section_separator,
                "merged" if merge_fallback else "single",
            ]
        )
        return hashlib.sha256(key_string.encode("utf-8")).hexdigest()[:32]

    def build(
        self,
        source_path: str,
        prefix: str,
        applied_lang: str,
        namespace: Optional[str] = None,
        section_separator: str = DEFAULT_SECTION_SEPARATOR,
        merge_fallback: bool = False,
    ) -> str:
        """Return the artifact file name.

        Args:
            source_path: Path of the translation source.
            prefix: Class name of the compiled translations.
            applied_lang: Language of the source.
            namespace: Optional module name the artifact is registered under.
            section_separator: Separator joining section and key names.
            merge_fallback: Whether fallback keys are merged in.

        Returns:
            File name of the cache artifact.
        """
        digest = self.digest(source_path, namespace, section_separator, merge_fallback)
        return f"i18n_{digest}_{prefix}_{applied_lang}.py"

    def cache_file_path(
        self,
        cache_dir: str,
        source_path: str,
        prefix: str,
        applied_lang: str,
        namespace: Optional[str] = None,
        section_separator: str = DEFAULT_SECTION_SEPARATOR,
        merge_fallback: bool = False,
    ) -> str:
        """Return the artifact path inside cache_dir."""
        return os.path.join(
            cache_dir,
            self.build(
                source_path,
                prefix,
                applied_lang,
                namespace,
                section_separator,
                merge_fallback,
            ),
        )


class CacheValidityOracle:
    """Decides whether a cache artifact can be reused.

    An artifact is stale when it is missing or strictly older than the
    source file, or, with merge_fallback, strictly older than the fallback
    source. Equal timestamps count as fresh.

    Attributes:
        storage: Backend used for existence and timestamp queries.
    """

    def __init__(self, storage: StorageBackend):
        self.storage = storage

    def is_stale(
        self,
        cache_path: str,
        source_path: str,
        fallback_path: Optional[str] = None,
        merge_fallback: bool = False,
    ) -> bool:
        """Return True if the artifact at cache_path must be regenerated.

        Raises:
            CacheLoadError: If the artifact exists but cannot be inspected.
            SourceUnavailableError: If a source timestamp cannot be read.
        """
        if not self.storage.exists(cache_path):
            logger.info("cache_missing", cache_path=cache_path)
            return True

        try:
            cache_mtime = self.storage.last_modified(cache_path)
        except StorageError as e:
            raise CacheLoadError(
                f"Could not inspect cache file '{cache_path}': {e}", path=cache_path
            ) from e

        if cache_mtime < self._source_mtime(source_path):
            logger.info("cache_outdated", cache_path=cache_path, source_path=source_path)
            return True

        if (
            merge_fallback
            and fallback_path is not None
            and cache_mtime < self._source_mtime(fallback_path)
        ):
            logger.info(
                "cache_outdated", cache_path=cache_path, source_path=fallback_path
            )
            return True

        return False

    def _source_mtime(self, path: str) -> float:
        try:
            return self.storage.last_modified(path)
        except StorageError as e:
            logger.error("source_stat_failed", path=path, error=str(e))
            raise SourceUnavailableError(
                f"Could not inspect translation source '{path}': {e}", path=path
            ) from e
