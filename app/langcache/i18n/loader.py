"""Translation source loading.

Reads a source file through the storage backend and parses it with the
parser registered for its extension. Supported formats are INI (``.ini``,
``.properties``), YAML (``.yml``, ``.yaml``) and JSON (``.json``).
"""

import configparser
import json
from pathlib import PurePath
from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from langcache.i18n.exceptions import (
    MalformedSourceError,
    SourceUnavailableError,
    UnsupportedFormatError,
)
from langcache.logging import get_module_logger
from langcache.storage import StorageBackend, StorageError

logger = get_module_logger()

Parser = Callable[[bytes], Any]

# Holds keys that appear before the first section header.
_ROOT_SECTION = "__langcache_root__"


def parse_yaml(data: bytes) -> Any:
    return yaml.safe_load(data)


def parse_json(data: bytes) -> Any:
    return json.loads(data)


def parse_ini(data: bytes) -> Dict[str, Any]:
    """Parse INI or properties data into a nested dict.

    Keys before the first section become top-level entries and every section
    becomes a nested dict. Key case is preserved, values are not
    interpolated, and one pair of surrounding double quotes is stripped.
    """
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        default_section=_ROOT_SECTION + "defaults",
    )
    parser.optionxform = str
    parser.read_string(f"[{_ROOT_SECTION}]\n" + data.decode("utf-8-sig"))

    result: Dict[str, Any] = {}
    for section in parser.sections():
        values = {key: _unquote(value) for key, value in parser.items(section, raw=True)}
        if section == _ROOT_SECTION:
            result.update(values)
        else:
            result[section] = values
    return result


def find_unencodable(value: Any) -> Optional[str]:
    """Return a key or string value that is not valid UTF-8 text, if any.

    JSON and YAML escapes can produce lone surrogates, which the artifact
    cannot be written with.
    """
    pending = [value]
    while pending:
        item = pending.pop()
        if isinstance(item, Mapping):
            pending.extend(item.keys())
            pending.extend(item.values())
        elif isinstance(item, (list, tuple)):
            pending.extend(item)
        elif isinstance(item, str):
            try:
                item.encode("utf-8")
            except UnicodeEncodeError:
                return item
    return None


def _unquote(value: Optional[str]) -> str:
    if value is None:
        return ""
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


PARSERS: Dict[str, Parser] = {
    "ini": parse_ini,
    "properties": parse_ini,
    "yml": parse_yaml,
    "yaml": parse_yaml,
    "json": parse_json,
}

PARSE_ERRORS = (
    yaml.YAMLError,
    configparser.Error,
    UnicodeDecodeError,
    ValueError,
)


class FormatLoader:
    """Loads translation sources, dispatching on the file extension.

    Attributes:
        storage: Backend the source files are read from.
        parsers: Mapping of lowercase extension to parser function.
    """

    def __init__(
        self,
        storage: StorageBackend,
        parsers: Optional[Mapping[str, Parser]] = None,
    ):
        self.storage = storage
        self.parsers = dict(parsers if parsers is not None else PARSERS)

    def parser_for(self, path: str) -> Parser:
        """Return the parser for a source path.

        Raises:
            UnsupportedFormatError: If the extension has no parser.
        """
        extension = PurePath(path).suffix.lstrip(".").lower()
        parser = self.parsers.get(extension)
        if parser is None:
            logger.error("unsupported_format", path=path, extension=extension)
            raise UnsupportedFormatError(
                f"'{extension}' is not a supported translation file extension ({path})",
                path=path,
                extension=extension,
            )
        return parser

    def load(self, path: str) -> Dict[str, Any]:
        """Load and parse a translation source.

        Args:
            path: Path of the source file.

        Returns:
            Nested mapping of section and key names to values.

        Raises:
            UnsupportedFormatError: If the extension is not supported.
            SourceUnavailableError: If the file cannot be read.
            MalformedSourceError: If parsing fails or yields no mapping.
        """
        parser = self.parser_for(path)

        try:
            data = self.storage.read(path)
        except StorageError as e:
            logger.error("source_read_failed", path=path, error=str(e))
            raise SourceUnavailableError(
                f"Could not read translation source '{path}': {e}", path=path
            ) from e

        try:
            parsed = parser(data)
        except PARSE_ERRORS as e:
            logger.error("source_parse_error", path=path, error=str(e))
            raise MalformedSourceError(
                f"Failed to parse translation source '{path}': {e}", path=path
            ) from e

        if not isinstance(parsed, Mapping):
            logger.error(
                "invalid_source_format",
                path=path,
                expected="mapping",
                actual=type(parsed).__name__,
            )
            raise MalformedSourceError(
                f"Translation source '{path}' does not contain a mapping", path=path
            )

        bad = find_unencodable(parsed)
        if bad is not None:
            logger.error("source_not_utf8", path=path, value=ascii(bad))
            raise MalformedSourceError(
                f"Translation source '{path}' contains text that is not valid UTF-8: "
                f"{ascii(bad)}",
                path=path,
            )

        logger.info("loaded_translation_source", path=path, key_count=len(parsed))
        return dict(parsed)
