"""Deep merge of a language's translations over its fallback."""

import copy
from typing import Any, Dict, Mapping

from langcache.i18n.constants import MAX_SECTION_DEPTH
from langcache.i18n.exceptions import SectionDepthExceededError


def merge_translations(
    primary: Mapping[str, Any],
    fallback: Mapping[str, Any],
    max_depth: int = MAX_SECTION_DEPTH,
) -> Dict[str, Any]:
    """Merge fallback translations under the primary ones.

    Sections present in both are merged recursively. On any other
    conflict the primary value wins, whether it is a string or a section.
    Keys only in fallback are added, keys only in primary are kept. Keys
    keep the fallback's order with primary-only keys appended.

    Neither argument is modified; the result shares no containers with them.

    Args:
        primary: Translations of the applied language.
        fallback: Translations of the fallback language.
        max_depth: Maximum section nesting.

    Returns:
        New merged mapping.

    Raises:
        SectionDepthExceededError: If sections nest deeper than max_depth.
    """
    return _merge(primary, fallback, 0, max_depth)


def _merge(
    primary: Mapping[str, Any],
    fallback: Mapping[str, Any],
    depth: int,
    max_depth: int,
) -> Dict[str, Any]:
    if depth > max_depth:
        raise SectionDepthExceededError(
            f"Sections are nested deeper than {max_depth} levels"
        )

    merged = {key: copy.deepcopy(value) for key, value in fallback.items()}
    for key, value in primary.items():
        base = fallback.get(key)
        if isinstance(value, Mapping) and isinstance(base, Mapping):
            merged[key] = _merge(value, base, depth + 1, max_depth)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
