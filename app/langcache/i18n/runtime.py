"""Runtime surface of compiled translation artifacts.

Every generated artifact defines one subclass of CompiledTranslations with
a class attribute per translation and a ``__messages__`` table:

    class L(CompiledTranslations):
        save = 'Speichern'
        greeting = 'Hallo %1'

    L.save                       # 'Speichern'
    L.get("greeting", ["David"]) # 'Hallo David'
"""

import importlib.abc
import importlib.util
import re
import sys
import types
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Type

from langcache.logging import get_module_logger

logger = get_module_logger()

PLACEHOLDER_PATTERN = re.compile(r"%(%|\d+)")


def interpolate(message: str, args: Sequence[Any]) -> str:
    """Substitute positional placeholders in message.

    ``%1`` is replaced by ``args[0]``, ``%2`` by ``args[1]`` and so on;
    ``%%`` yields a literal ``%``.

    Args:
        message: Text containing placeholders.
        args: Replacement values, converted with str().

    Returns:
        Interpolated message.

    Raises:
        ValueError: If a placeholder has no matching argument.
    """

    def _replace(match: "re.Match[str]") -> str:
        token = match.group(1)
        if token == "%":
            return "%"
        index = int(token)
        if index < 1 or index > len(args):
            logger.error(
                "missing_interpolation_argument",
                placeholder=match.group(0),
                argument_count=len(args),
            )
            raise ValueError(
                f"Missing interpolation argument for {match.group(0)}: "
                f"{len(args)} argument(s) supplied"
            )
        return str(args[index - 1])

    return PLACEHOLDER_PATTERN.sub(_replace, message)


class CompiledTranslations:
    """Base class of generated translation classes."""

    __messages__: ClassVar[Dict[str, str]] = {}
    __language__: ClassVar[str] = ""
    __source__: ClassVar[str] = ""

    @classmethod
    def get(cls, name: str, args: Optional[Sequence[Any]] = None) -> str:
        """Return a translation, interpolated when args are given.

        Args:
            name: Flattened translation key.
            args: Optional positional values for ``%1``, ``%2``, ...

        Returns:
            The literal text, or its interpolated form.

        Raises:
            KeyError: If name is not a compiled translation.
            ValueError: If a placeholder has no matching argument.
        """
        try:
            message = cls.__messages__[name]
        except KeyError:
            logger.error("translation_not_found", key=name, language=cls.__language__)
            raise KeyError(
                f"Translation not found for key {name} in {cls.__language__ or cls.__name__}"
            ) from None
        return interpolate(message, args) if args else message

    @classmethod
    def has(cls, name: str) -> bool:
        return name in cls.__messages__

    @classmethod
    def keys(cls) -> List[str]:
        return list(cls.__messages__)

    @classmethod
    def as_dict(cls) -> Dict[str, str]:
        return dict(cls.__messages__)


class ArtifactLoader(importlib.abc.InspectLoader):
    """Import loader for artifact source already read from storage.

    Artifacts may live in any StorageBackend, so the loader is handed the
    bytes instead of reading a path itself.

    Attributes:
        source: Artifact contents.
        path: Artifact path, used as the module's ``__file__``.
    """

    def __init__(self, source: bytes, path: str):
        self.source = source
        self.path = path

    def get_filename(self, fullname: str) -> str:
        return self.path

    def get_source(self, fullname: str) -> str:
        return self.source.decode("utf-8")

    def get_code(self, fullname: str) -> types.CodeType:
        return self.source_to_code(self.source, self.path)

    def is_package(self, fullname: str) -> bool:
        return False


def is_artifact_module(module: Any) -> bool:
    """Return True if module was loaded by ArtifactLoader."""
    spec = getattr(module, "__spec__", None)
    return isinstance(getattr(spec, "loader", None), ArtifactLoader)


def shadows_module(module_name: str) -> bool:
    """Return True if registering module_name would hide a real module.

    A name held by an earlier artifact may be replaced. Any other entry in
    sys.modules, or an importable module of that name, may not.
    """
    existing = sys.modules.get(module_name)
    if existing is not None:
        return not is_artifact_module(existing)

    parent = module_name.rpartition(".")[0]
    if parent and parent not in sys.modules:
        # find_spec would import the parent package.
        return False
    try:
        return importlib.util.find_spec(module_name) is not None
    except (ImportError, ValueError):
        return False


def load_artifact(
    source: bytes,
    filename: str,
    prefix: str,
    module_name: str,
    register: bool = False,
) -> Type[CompiledTranslations]:
    """Execute artifact source and return its compiled translations class.

    Args:
        source: Artifact contents.
        filename: Path shown in tracebacks and set as ``__file__``.
        prefix: Name of the class defined by the artifact.
        module_name: Name given to the module object.
        register: Whether to publish the module in sys.modules under
            module_name.

    Returns:
        The CompiledTranslations subclass named prefix.

    Raises:
        SyntaxError: If source is not valid Python.
        LookupError: If source defines no compiled class named prefix.
    """
    loader = ArtifactLoader(source, filename)
    spec = importlib.util.spec_from_file_location(module_name, filename, loader=loader)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    compiled = getattr(module, prefix, None)
    if not (isinstance(compiled, type) and issubclass(compiled, CompiledTranslations)):
        raise LookupError(f"{filename} does not define compiled translations '{prefix}'")

    if register:
        sys.modules[module_name] = module
    return compiled
