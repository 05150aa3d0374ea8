"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_i18n,
    make_request_context,
    make_translation_mapping,
    write_source,
)

__all__ = [
    "make_i18n",
    "make_request_context",
    "make_translation_mapping",
    "write_source",
]
