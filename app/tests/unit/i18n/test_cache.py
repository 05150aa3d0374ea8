"""Tests for langcache.i18n.cache module."""

import os
import re
from unittest.mock import MagicMock

import pytest

from langcache.i18n import (
    CacheKeyBuilder,
    CacheLoadError,
    CacheValidityOracle,
    SourceUnavailableError,
)
from langcache.storage import StorageError


@pytest.mark.unit
class TestCacheKeyBuilder:
    """Tests for CacheKeyBuilder."""

    def test_build_format(self):
        """Names carry the digest, prefix and applied language."""
        name = CacheKeyBuilder().build("lang/de.yml", prefix="L", applied_lang="de")
        assert re.fullmatch(r"i18n_[0-9a-f]{32}_L_de\.py", name)

    def test_build_deterministic(self):
        """The same inputs give the same name."""
        builder = CacheKeyBuilder()
        assert builder.build("lang/de.yml", "L", "de") == builder.build(
            "lang/de.yml", "L", "de"
        )

    def test_relative_and_absolute_paths_match(self):
        """Relative source paths are resolved before hashing."""
        builder = CacheKeyBuilder()
        assert builder.build("lang/de.yml", "L", "de") == builder.build(
            os.path.abspath("lang/de.yml"), "L", "de"
        )

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"source_path": "other/de.yml"},
            {"prefix": "T"},
            {"applied_lang": "fr"},
            {"namespace": "app.translations"},
            {"section_separator": "__"},
            {"merge_fallback": True},
        ],
    )
    def test_any_input_changes_the_name(self, kwargs):
        """Every option that shapes the artifact affects the name."""
        base = {"source_path": "lang/de.yml", "prefix": "L", "applied_lang": "de"}
        builder = CacheKeyBuilder()
        assert builder.build(**base) != builder.build(**{**base, **kwargs})

    def test_compiler_version_changes_the_name(self):
        """A different compiler version gives a different name."""
        first = CacheKeyBuilder(compiler_version="v1").build("lang/de.yml", "L", "de")
        second = CacheKeyBuilder(compiler_version="v2").build("lang/de.yml", "L", "de")
        assert first != second

    def test_cache_file_path(self):
        """cache_file_path() joins the cache directory and name."""
        builder = CacheKeyBuilder()
        path = builder.cache_file_path("cache", "lang/de.yml", "L", "de")
        assert path == os.path.join("cache", builder.build("lang/de.yml", "L", "de"))

    def test_cache_file_path_passes_options(self):
        """cache_file_path() names the artifact with every option."""
        builder = CacheKeyBuilder()
        path = builder.cache_file_path(
            "cache", "lang/de.yml", "L", "de", section_separator="__", merge_fallback=True
        )
        assert os.path.basename(path) == builder.build(
            "lang/de.yml", "L", "de", section_separator="__", merge_fallback=True
        )
        assert path != builder.cache_file_path("cache", "lang/de.yml", "L", "de")


@pytest.mark.unit
class TestCacheValidityOracle:
    """Tests for CacheValidityOracle."""

    def test_missing_artifact_is_stale(self, memory_storage):
        """A missing artifact must be generated."""
        memory_storage.write("lang/de.yml", b"save: Speichern")
        oracle = CacheValidityOracle(memory_storage)
        assert oracle.is_stale("cache/de.py", "lang/de.yml") is True

    def test_newer_artifact_is_fresh(self, memory_storage, clock):
        """An artifact written after the source is reused."""
        memory_storage.write("lang/de.yml", b"save: Speichern")
        clock.advance()
        memory_storage.write("cache/de.py", b"")

        assert CacheValidityOracle(memory_storage).is_stale("cache/de.py", "lang/de.yml") is False

    def test_equal_timestamps_are_fresh(self, memory_storage):
        """Equal timestamps count as fresh."""
        memory_storage.write("lang/de.yml", b"save: Speichern")
        memory_storage.write("cache/de.py", b"")

        assert CacheValidityOracle(memory_storage).is_stale("cache/de.py", "lang/de.yml") is False

    def test_touched_source_makes_artifact_stale(self, memory_storage, clock):
        """Rewriting the source after the artifact invalidates it."""
        memory_storage.write("lang/de.yml", b"save: Speichern")
        clock.advance()
        memory_storage.write("cache/de.py", b"")
        clock.advance()
        memory_storage.write("lang/de.yml", b"save: Sichern")

        assert CacheValidityOracle(memory_storage).is_stale("cache/de.py", "lang/de.yml") is True

    def test_newer_fallback_makes_artifact_stale_when_merging(self, memory_storage, clock):
        """A fallback newer than the artifact invalidates it with merging on."""
        memory_storage.write("lang/de.yml", b"")
        memory_storage.write("cache/de.py", b"")
        clock.advance()
        memory_storage.write("lang/en.yml", b"")
        oracle = CacheValidityOracle(memory_storage)

        assert oracle.is_stale(
            "cache/de.py", "lang/de.yml", fallback_path="lang/en.yml", merge_fallback=True
        ) is True

    def test_newer_fallback_ignored_without_merging(self, memory_storage, clock):
        """The fallback timestamp only matters when merging."""
        memory_storage.write("lang/de.yml", b"")
        memory_storage.write("cache/de.py", b"")
        clock.advance()
        memory_storage.write("lang/en.yml", b"")
        oracle = CacheValidityOracle(memory_storage)

        assert oracle.is_stale(
            "cache/de.py", "lang/de.yml", fallback_path="lang/en.yml", merge_fallback=False
        ) is False

    def test_local_files_use_modification_times(self, tmp_path, local_storage):
        """Local artifacts are compared by their mtime."""
        source = tmp_path / "de.yml"
        artifact = tmp_path / "de.py"
        source.write_text("save: Speichern")
        artifact.write_text("")
        os.utime(source, (1000, 1000))
        os.utime(artifact, (2000, 2000))
        oracle = CacheValidityOracle(local_storage)

        assert oracle.is_stale(str(artifact), str(source)) is False

        os.utime(source, (3000, 3000))
        assert oracle.is_stale(str(artifact), str(source)) is True

    def test_missing_source_raises(self, memory_storage):
        """A source that cannot be inspected raises SourceUnavailableError."""
        memory_storage.write("cache/de.py", b"")
        with pytest.raises(SourceUnavailableError) as exc_info:
            CacheValidityOracle(memory_storage).is_stale("cache/de.py", "lang/de.yml")
        assert exc_info.value.path == "lang/de.yml"

    def test_uninspectable_artifact_raises(self):
        """An artifact whose timestamp cannot be read raises CacheLoadError."""
        storage = MagicMock()
        storage.exists.return_value = True
        storage.last_modified.side_effect = StorageError("denied", path="cache/de.py")

        with pytest.raises(CacheLoadError):
            CacheValidityOracle(storage).is_stale("cache/de.py", "lang/de.yml")
