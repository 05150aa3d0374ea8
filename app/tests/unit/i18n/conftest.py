"""Feature-level fixtures for i18n pipeline tests."""

import pytest

from tests.factories.i18n import make_translation_mapping, write_source


@pytest.fixture
def lang_dir(tmp_path):
    """Directory with en.yml and de.yml translation sources.

    Both files get a fixed modification time of 1000.
    """
    directory = tmp_path / "lang"
    directory.mkdir()
    write_source(directory, "en.yml", make_translation_mapping("en"), mtime=1000)
    write_source(directory, "de.yml", make_translation_mapping("de"), mtime=1000)
    return directory


@pytest.fixture
def cache_dir(tmp_path):
    """Cache directory path; not created up front."""
    return tmp_path / "cache"


@pytest.fixture
def sample_translation_data():
    """Nested translations with a section and a scalar mix."""
    return {
        "greeting": "Hi %1",
        "section": {"save": "Save"},
    }


@pytest.fixture
def accept_language_headers():
    """Collection of Accept-Language headers for testing."""
    return {
        "simple_de": "de",
        "specific_de_ch": "de-CH",
        "with_quality": "fr-FR,fr;q=0.9,en;q=0.8",
        "uppercase": "DE-de,EN",
        "spaced": "fr, de",
    }
