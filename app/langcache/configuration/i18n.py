"""Translation pipeline settings."""

from typing import Optional

from pydantic import Field, field_validator

from langcache.configuration.base import LangcacheSettings
from langcache.validation import is_language_code

LANGUAGE_PLACEHOLDER = "{LANGUAGE}"


class I18nSettings(LangcacheSettings):
    """Configuration for language resolution and the compiled cache.

    Environment Variables:
        I18N_FILE_PATH: Source file template, must contain {LANGUAGE}
            (default: ./lang/lang_{LANGUAGE}.ini)
        I18N_CACHE_PATH: Directory for compiled artifacts (default: ./langcache/)
        I18N_FALLBACK_LANG: Lowest priority language, always tried (default: en)
        I18N_PREFIX: Class name of the compiled artifact (default: L)
        I18N_FORCED_LANG: Language that overrides every request signal
        I18N_MERGE_FALLBACK: Merge fallback strings under the applied
            language (default: False)
        I18N_SECTION_SEPARATOR: Joins section and key names (default: _)
        I18N_NAMESPACE: Module name the compiled artifact is registered under

    Example:
        ```python
        from langcache.configuration import settings

        i18n = I18n.from_settings(settings.i18n)
        ```
    """

    file_path: str = Field(
        default="./lang/lang_{LANGUAGE}.ini",
        alias="I18N_FILE_PATH",
        description="Translation source template containing {LANGUAGE}",
    )
    cache_path: str = Field(
        default="./langcache/",
        alias="I18N_CACHE_PATH",
        description="Directory where compiled artifacts are written",
    )
    fallback_lang: str = Field(
        default="en",
        alias="I18N_FALLBACK_LANG",
        description="Language used when no other candidate has a source file",
    )
    prefix: str = Field(
        default="L",
        alias="I18N_PREFIX",
        description="Class name of the compiled translations",
    )
    forced_lang: Optional[str] = Field(
        default=None,
        alias="I18N_FORCED_LANG",
        description="Language forced ahead of every request signal",
    )
    merge_fallback: bool = Field(
        default=False,
        alias="I18N_MERGE_FALLBACK",
        description="Fill keys missing from the applied language with fallback strings",
    )
    section_separator: str = Field(
        default="_",
        alias="I18N_SECTION_SEPARATOR",
        description="String joining section names and keys",
    )
    namespace: Optional[str] = Field(
        default=None,
        alias="I18N_NAMESPACE",
        description="Module name to register the compiled artifact under",
    )

    @field_validator("file_path")
    @classmethod
    def _require_placeholder(cls, v: str) -> str:
        """Reject templates that cannot vary by language."""
        if LANGUAGE_PLACEHOLDER not in v:
            raise ValueError(f"file path must contain {LANGUAGE_PLACEHOLDER}: {v}")
        return v

    @field_validator("fallback_lang")
    @classmethod
    def _validate_fallback(cls, v: str) -> str:
        """The fallback language must be a legal language code."""
        if not v or not is_language_code(v):
            raise ValueError(f"invalid fallback language: {v!r}")
        return v
