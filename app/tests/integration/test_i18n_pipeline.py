"""End-to-end tests for the i18n pipeline on the local filesystem."""

import os
import time

import pytest

from langcache.configuration import I18nSettings
from langcache.i18n import RequestContext
from langcache.i18n.factory import create_i18n
from tests.factories.i18n import make_translation_mapping, write_source


@pytest.fixture
def project(tmp_path):
    """Translation sources in three formats plus an empty cache location."""
    lang_dir = tmp_path / "lang"
    lang_dir.mkdir()
    (lang_dir / "lang_en.ini").write_text(
        'save = "Save"\ngreeting = "Hi %1"\n\n[menu]\nopen = Open\nquit = Quit\n',
        encoding="utf-8",
    )
    (lang_dir / "lang_de.ini").write_text(
        'save = "Speichern"\ngreeting = "Hallo %1"\n\n[menu]\nopen = Öffnen\n',
        encoding="utf-8",
    )
    return tmp_path


def _settings(project, **overrides):
    values = {
        "I18N_FILE_PATH": str(project / "lang" / "lang_{LANGUAGE}.ini"),
        "I18N_CACHE_PATH": str(project / "cache"),
    }
    values.update(overrides)
    return I18nSettings(**values)


@pytest.mark.integration
class TestI18nPipeline:
    """Resolution, compilation, caching and loading together."""

    def test_request_from_wsgi_environ(self, project):
        """A German browser gets German strings."""
        environ = {"HTTP_ACCEPT_LANGUAGE": "de-DE,de;q=0.9,en;q=0.8"}

        i18n = create_i18n(
            settings=_settings(project),
            request_context=RequestContext.from_wsgi_environ(environ),
            preload=True,
        )
        L = i18n.translations

        assert i18n.applied_lang == "de"
        assert L.save == "Speichern"
        assert L.get("greeting", ["David"]) == "Hallo David"
        assert L.menu_open == "Öffnen"

    def test_query_parameter_beats_header(self, project):
        """?lang= outranks the Accept-Language header."""
        environ = {"QUERY_STRING": "lang=en", "HTTP_ACCEPT_LANGUAGE": "de"}

        i18n = create_i18n(
            settings=_settings(project),
            request_context=RequestContext.from_wsgi_environ(environ),
            preload=True,
        )

        assert i18n.applied_lang == "en"
        assert i18n.user_langs == ["en", "de"]

    def test_session_language(self, project):
        """The session language is used when the request has none."""
        i18n = create_i18n(
            settings=_settings(project),
            request_context=RequestContext.from_wsgi_environ({}, session={"lang": "de"}),
            preload=True,
        )
        assert i18n.applied_lang == "de"

    def test_one_artifact_per_language(self, project):
        """Each applied language gets its own artifact in the cache directory."""
        for lang in ("de", "en"):
            create_i18n(
                settings=_settings(project, I18N_FORCED_LANG=lang), preload=True
            )

        artifacts = sorted(os.listdir(project / "cache"))
        assert len(artifacts) == 2
        assert artifacts[0].endswith("_L_de.py")
        assert artifacts[1].endswith("_L_en.py")

    def test_cache_survives_until_source_changes(self, project):
        """Artifacts are reused until their source is newer."""
        first = create_i18n(settings=_settings(project), preload=True)
        artifact = first.cache_file_path
        past = time.time() - 100
        os.utime(artifact, (past, past))
        os.utime(project / "lang" / "lang_en.ini", (past - 100, past - 100))

        create_i18n(settings=_settings(project), preload=True)
        assert os.stat(artifact).st_mtime == past

        (project / "lang" / "lang_en.ini").write_text('save = "Store"\n', encoding="utf-8")
        L = create_i18n(settings=_settings(project), preload=True).translations

        assert L.save == "Store"
        assert os.stat(artifact).st_mtime > past

    def test_merged_fallback_with_yaml_sources(self, tmp_path):
        """Merging fills gaps across YAML sources."""
        write_source(tmp_path, "en.yml", make_translation_mapping("en"))
        write_source(tmp_path, "de.yml", make_translation_mapping("de"))
        settings = I18nSettings(
            I18N_FILE_PATH=str(tmp_path / "{LANGUAGE}.yml"),
            I18N_CACHE_PATH=str(tmp_path / "cache"),
            I18N_FORCED_LANG="de",
            I18N_MERGE_FALLBACK=True,
        )

        L = create_i18n(settings=settings, preload=True).translations

        assert L.menu_close == "Schließen"
        assert L.menu_quit == "Quit"
        assert L.get("greeting", ["Ana"]) == "Hallo Ana"
