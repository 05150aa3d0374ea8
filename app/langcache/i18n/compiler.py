"""Flattening of nested translations into compiled entries.

Nested sections are joined into a single attribute name using the section
separator, so ``{"section": {"save": "Save"}}`` compiles to an entry named
``section_save``. Every name is validated because it becomes an attribute
of the generated class.
"""

import unicodedata
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Set, Tuple

from langcache.i18n.constants import DEFAULT_SECTION_SEPARATOR, MAX_SECTION_DEPTH
from langcache.i18n.exceptions import (
    InvalidIdentifierError,
    SectionDepthExceededError,
)
from langcache.logging import get_module_logger
from langcache.validation import is_identifier

logger = get_module_logger()

_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def quote_literal(value: str) -> str:
    """Return value as a single-quoted Python string literal.

    Quotes and backslashes are escaped, control characters are written as
    escapes so the literal always fits on one source line.
    """
    chars = []
    for ch in value:
        escaped = _ESCAPES.get(ch)
        if escaped is None and (ch < " " or ch == "\x7f"):
            escaped = f"\\x{ord(ch):02x}"
        chars.append(escaped or ch)
    return "'" + "".join(chars) + "'"


def coerce_scalar(value: Any) -> str:
    """Convert a leaf value to the string stored in the compiled artifact.

    Booleans become ``"1"`` or ``""``, None becomes ``""`` and whole floats
    lose their fractional part; everything else goes through str().
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class CompiledEntry:
    """A flattened translation.

    Attributes:
        name: Attribute name in the compiled class.
        value: Translated text, before any argument interpolation.
    """

    name: str
    value: str

    @property
    def literal(self) -> str:
        """The value as an escaped Python string literal."""
        return quote_literal(self.value)


class KeyCompiler:
    """Flattens nested translations into an ordered list of CompiledEntry.

    Entries are emitted depth-first in input order, so identical input
    always produces identical output.

    Attributes:
        separator: String inserted between section and key names.
        max_depth: Maximum section nesting.
    """

    def __init__(
        self,
        separator: str = DEFAULT_SECTION_SEPARATOR,
        max_depth: int = MAX_SECTION_DEPTH,
    ):
        self.separator = separator
        self.max_depth = max_depth

    def compile(self, mapping: Mapping[str, Any]) -> List[CompiledEntry]:
        """Compile a translation mapping.

        Args:
            mapping: Nested translations. Lists are treated as sections
                keyed by index.

        Returns:
            Compiled entries in input order.

        Raises:
            InvalidIdentifierError: If a flattened name is not a valid
                identifier or occurs twice.
            SectionDepthExceededError: If sections nest deeper than max_depth.
        """
        entries: List[CompiledEntry] = []
        seen: Set[str] = set()
        self._compile_section(mapping, "", 0, entries, seen)
        logger.debug("compiled_translations", entry_count=len(entries))
        return entries

    def _compile_section(
        self,
        section: Any,
        prefix: str,
        depth: int,
        entries: List[CompiledEntry],
        seen: Set[str],
    ) -> None:
        if depth > self.max_depth:
            logger.error("section_depth_exceeded", prefix=prefix, max_depth=self.max_depth)
            raise SectionDepthExceededError(
                f"Section '{prefix}' is nested deeper than {self.max_depth} levels"
            )

        for key, value in _items(section):
            key = str(key)
            if isinstance(value, (Mapping, list, tuple)):
                self._compile_section(
                    value, prefix + key + self.separator, depth + 1, entries, seen
                )
                continue

            full_name = prefix + key
            if not is_identifier(full_name):
                logger.error("invalid_translation_key", key=full_name)
                raise InvalidIdentifierError(
                    f"Cannot compile translation key '{full_name}' because it is "
                    "not a valid identifier",
                    key=full_name,
                )
            # Python folds identifiers to NFKC, so "\xaa" and "a" are one attribute.
            normalized = unicodedata.normalize("NFKC", full_name)
            if normalized in seen:
                logger.error("duplicate_translation_key", key=full_name)
                raise InvalidIdentifierError(
                    f"Cannot compile translation key '{full_name}' because it is "
                    "defined more than once",
                    key=full_name,
                )
            seen.add(normalized)
            entries.append(CompiledEntry(name=full_name, value=coerce_scalar(value)))


def _items(section: Any) -> Iterable[Tuple[Any, Any]]:
    if isinstance(section, Mapping):
        return section.items()
    return enumerate(section)
