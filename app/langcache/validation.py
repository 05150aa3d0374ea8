"""Shared name validation for language codes and generated identifiers."""

import keyword
import re
import unicodedata

LANGUAGE_CODE_PATTERN = re.compile(r"[a-zA-Z0-9_-]*")
IDENTIFIER_PATTERN = re.compile(r"[a-zA-Z_\x7f-\U0010ffff][a-zA-Z0-9_\x7f-\U0010ffff]*")

# Names the compiled class needs for its own accessors.
RESERVED_NAMES = frozenset({"get", "has", "keys", "as_dict"})


def is_language_code(value: object) -> bool:
    """Return True if value may be used as a language code."""
    return isinstance(value, str) and LANGUAGE_CODE_PATTERN.fullmatch(value) is not None


def is_python_name(name: str) -> bool:
    """Return True if name is usable as a Python class or module name."""
    return name.isidentifier() and not keyword.iskeyword(name)


def is_identifier(name: str) -> bool:
    """Return True if name can become an attribute of a compiled class.

    The name must match the identifier grammar, be a legal Python name and
    must not shadow the accessors of the compiled class. Names with a leading
    double underscore are refused.
    """
    if IDENTIFIER_PATTERN.fullmatch(name) is None:
        return False
    # The parser applies NFKC, "\xbar" would be read as the keyword "or".
    name = unicodedata.normalize("NFKC", name)
    if not is_python_name(name):
        return False
    if name in RESERVED_NAMES:
        return False
    return not name.startswith("__")


def is_dotted_name(name: str) -> bool:
    """Return True if name is a dotted module path like ``app.translations``."""
    return bool(name) and all(is_python_name(part) for part in name.split("."))
