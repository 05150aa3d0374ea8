"""i18n pipeline - language resolution and compiled translation cache.

Picks one translation source for the user's preferred language, decides
whether the compiled artifact on disk is still valid, regenerates it when
needed and loads it as a Python class.

Main components:
- resolvers: RequestContext, resolve_candidates and CandidateResolver
- locator: SourceLocator for finding the first existing source file
- loader: FormatLoader for INI, YAML and JSON sources
- merger: merge_translations for fallback merging
- compiler: KeyCompiler flattening sections into CompiledEntry values
- cache: CacheKeyBuilder and CacheValidityOracle
- emitter: ArtifactEmitter rendering and writing artifacts
- runtime: CompiledTranslations, the base of every generated class
- service: I18n, tying the pipeline together
"""

from langcache.i18n.cache import CacheKeyBuilder, CacheValidityOracle
from langcache.i18n.compiler import CompiledEntry, KeyCompiler
from langcache.i18n.emitter import ArtifactEmitter
from langcache.i18n.exceptions import (
    AlreadyInitializedError,
    CacheDirUnavailableError,
    CacheLoadError,
    CacheWriteFailedError,
    I18nError,
    InvalidIdentifierError,
    MalformedSourceError,
    NoLanguageFileFoundError,
    SectionDepthExceededError,
    SourceUnavailableError,
    UnsupportedFormatError,
)
from langcache.i18n.loader import FormatLoader
from langcache.i18n.locator import LocatedSource, SourceLocator
from langcache.i18n.merger import merge_translations
from langcache.i18n.resolvers import (
    CandidateResolver,
    RequestContext,
    resolve_candidates,
)
from langcache.i18n.runtime import (
    ArtifactLoader,
    CompiledTranslations,
    interpolate,
    is_artifact_module,
    load_artifact,
    shadows_module,
)
from langcache.i18n.service import I18n, I18nOptions, I18nState

__all__ = [
    "I18n",
    "I18nOptions",
    "I18nState",
    "RequestContext",
    "CandidateResolver",
    "resolve_candidates",
    "SourceLocator",
    "LocatedSource",
    "FormatLoader",
    "merge_translations",
    "KeyCompiler",
    "CompiledEntry",
    "CacheKeyBuilder",
    "CacheValidityOracle",
    "ArtifactEmitter",
    "CompiledTranslations",
    "ArtifactLoader",
    "load_artifact",
    "interpolate",
    "is_artifact_module",
    "shadows_module",
    "I18nError",
    "AlreadyInitializedError",
    "NoLanguageFileFoundError",
    "SourceUnavailableError",
    "UnsupportedFormatError",
    "MalformedSourceError",
    "SectionDepthExceededError",
    "InvalidIdentifierError",
    "CacheDirUnavailableError",
    "CacheWriteFailedError",
    "CacheLoadError",
]
