"""Source file lookup for candidate languages."""

from dataclasses import dataclass
from typing import Sequence

from langcache.i18n.exceptions import NoLanguageFileFoundError
from langcache.logging import get_module_logger
from langcache.storage import StorageBackend

logger = get_module_logger()

LANGUAGE_PLACEHOLDER = "{LANGUAGE}"


@dataclass(frozen=True)
class LocatedSource:
    """The source file chosen for a request.

    Attributes:
        applied_lang: Language whose source file was found.
        path: Path of that source file.
    """

    applied_lang: str
    path: str


class SourceLocator:
    """Finds the first candidate language that has a source file.

    Attributes:
        storage: Backend used for existence checks.
        path_template: Source path containing the {LANGUAGE} placeholder.
    """

    def __init__(self, storage: StorageBackend, path_template: str):
        self.storage = storage
        self.path_template = path_template

    def path_for(self, lang: str) -> str:
        """Return the source path for a language code."""
        return self.path_template.replace(LANGUAGE_PLACEHOLDER, lang)

    def locate(self, candidates: Sequence[str]) -> LocatedSource:
        """Return the first candidate whose source file exists.

        Args:
            candidates: Language codes in priority order.

        Returns:
            LocatedSource for the first hit.

        Raises:
            NoLanguageFileFoundError: If no candidate has a source file.
        """
        for lang in candidates:
            path = self.path_for(lang)
            if self.storage.exists(path):
                logger.info("located_language_file", applied_lang=lang, path=path)
                return LocatedSource(applied_lang=lang, path=path)

        logger.error(
            "no_language_file_found",
            candidates=list(candidates),
            path_template=self.path_template,
        )
        raise NoLanguageFileFoundError(
            f"No language file was found for {list(candidates)} using '{self.path_template}'",
            candidates=candidates,
            path_template=self.path_template,
        )
