"""Language resolution and compiled translation cache.

I18n ties the pipeline together: resolve candidate languages, locate the
source file, reuse or regenerate the compiled artifact and load it.

Usage:
    from langcache.i18n import I18n, RequestContext

    i18n = I18n(file_path="lang/{LANGUAGE}.yml", cache_path="langcache/")
    i18n.set_request_context(RequestContext.from_wsgi_environ(environ, session))
    L = i18n.init()

    L.save                        # 'Speichern'
    L.get("greeting", ["David"])  # 'Hallo David'
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Type

from langcache.i18n.cache import CacheKeyBuilder, CacheValidityOracle
from langcache.i18n.compiler import KeyCompiler
from langcache.i18n.constants import (
    DEFAULT_CACHE_PATH,
    DEFAULT_FALLBACK_LANG,
    DEFAULT_FILE_PATH,
    DEFAULT_PREFIX,
    DEFAULT_SECTION_SEPARATOR,
)
from langcache.i18n.emitter import ArtifactEmitter, validate_namespace, validate_prefix
from langcache.i18n.exceptions import (
    AlreadyInitializedError,
    CacheLoadError,
    NoLanguageFileFoundError,
)
from langcache.i18n.loader import FormatLoader
from langcache.i18n.locator import LocatedSource, SourceLocator
from langcache.i18n.merger import merge_translations
from langcache.i18n.resolvers import RequestContext, resolve_candidates
from langcache.i18n.runtime import CompiledTranslations, load_artifact
from langcache.logging import get_module_logger
from langcache.operations import OperationResult
from langcache.storage import LocalFileStorage, StorageBackend, StorageError

if TYPE_CHECKING:
    from langcache.configuration import I18nSettings

logger = get_module_logger()


class I18nState(Enum):
    """Lifecycle of an I18n object.

    Attributes:
        UNCONFIGURED: Settings may still change.
        INITIALIZED: init() has run; settings are frozen for good.
    """

    UNCONFIGURED = "unconfigured"
    INITIALIZED = "initialized"


@dataclass(frozen=True)
class I18nOptions:
    """Settings of an I18n object.

    Attributes:
        file_path: Source file template containing {LANGUAGE}.
        cache_path: Directory for compiled artifacts.
        fallback_lang: Lowest priority language, always tried.
        prefix: Class name of the compiled translations.
        forced_lang: Language that outranks every request signal.
        merge_fallback: Fill keys missing from the applied language with
            fallback strings.
        section_separator: Joins section and key names.
        namespace: Module name the compiled artifact is registered under.
    """

    file_path: str = DEFAULT_FILE_PATH
    cache_path: str = DEFAULT_CACHE_PATH
    fallback_lang: str = DEFAULT_FALLBACK_LANG
    prefix: str = DEFAULT_PREFIX
    forced_lang: Optional[str] = None
    merge_fallback: bool = False
    section_separator: str = DEFAULT_SECTION_SEPARATOR
    namespace: Optional[str] = None


class I18n:
    """Resolves the user's language and loads its compiled translations.

    Settings can be changed through the setters until init() runs. init()
    moves the object to INITIALIZED exactly once; afterwards every setter
    returns an error result and another init() raises
    AlreadyInitializedError.

    Attributes:
        storage: Backend for sources and cache artifacts.
    """

    def __init__(
        self,
        file_path: Optional[str] = None,
        cache_path: Optional[str] = None,
        fallback_lang: Optional[str] = None,
        prefix: Optional[str] = None,
        *,
        storage: Optional[StorageBackend] = None,
        request_context: Optional[RequestContext] = None,
        **options: Any,
    ):
        """Initialize I18n.

        Args:
            file_path: Source file template; must contain {LANGUAGE}.
            cache_path: Directory for compiled artifacts.
            fallback_lang: Language used when no other candidate has a file.
            prefix: Class name of the compiled translations.
            storage: Backend for sources and artifacts (default: local files).
            request_context: Request signals used for resolution.
            **options: Any other I18nOptions field, e.g. forced_lang.
        """
        given = {
            "file_path": file_path,
            "cache_path": cache_path,
            "fallback_lang": fallback_lang,
            "prefix": prefix,
        }
        given = {key: value for key, value in given.items() if value is not None}
        self._options = I18nOptions(**given, **options)
        self._request_context = request_context or RequestContext()
        self._state = I18nState.UNCONFIGURED
        self.storage = storage or LocalFileStorage()

        self._user_langs: List[str] = []
        self._applied_lang: Optional[str] = None
        self._lang_file_path: Optional[str] = None
        self._cache_file_path: Optional[str] = None
        self._translations: Optional[Type[CompiledTranslations]] = None

    @classmethod
    def from_settings(
        cls,
        settings: "I18nSettings",
        storage: Optional[StorageBackend] = None,
        request_context: Optional[RequestContext] = None,
    ) -> "I18n":
        """Create an I18n object from I18nSettings."""
        return cls(
            file_path=settings.file_path,
            cache_path=settings.cache_path,
            fallback_lang=settings.fallback_lang,
            prefix=settings.prefix,
            storage=storage,
            request_context=request_context,
            forced_lang=settings.forced_lang,
            merge_fallback=settings.merge_fallback,
            section_separator=settings.section_separator,
            namespace=settings.namespace,
        )

    # State and results

    @property
    def state(self) -> I18nState:
        return self._state

    @property
    def is_initialized(self) -> bool:
        return self._state is I18nState.INITIALIZED

    @property
    def options(self) -> I18nOptions:
        return self._options

    @property
    def cache_path(self) -> str:
        return self._options.cache_path

    @property
    def fallback_lang(self) -> str:
        return self._options.fallback_lang

    @property
    def applied_lang(self) -> Optional[str]:
        """Language whose source was used; None before init()."""
        return self._applied_lang

    @property
    def user_langs(self) -> List[str]:
        """Candidate list computed by init()."""
        return list(self._user_langs)

    @property
    def lang_file_path(self) -> Optional[str]:
        return self._lang_file_path

    @property
    def cache_file_path(self) -> Optional[str]:
        return self._cache_file_path

    @property
    def translations(self) -> Optional[Type[CompiledTranslations]]:
        """Compiled translations class loaded by init()."""
        return self._translations

    # Setters

    def set_file_path(self, file_path: str) -> OperationResult:
        return self._set_option("file_path", file_path)

    def set_cache_path(self, cache_path: str) -> OperationResult:
        return self._set_option("cache_path", cache_path)

    def set_fallback_lang(self, fallback_lang: str) -> OperationResult:
        return self._set_option("fallback_lang", fallback_lang)

    def set_merge_fallback(self, merge_fallback: bool) -> OperationResult:
        return self._set_option("merge_fallback", merge_fallback)

    def set_prefix(self, prefix: str) -> OperationResult:
        return self._set_option("prefix", prefix)

    def set_forced_lang(self, forced_lang: Optional[str]) -> OperationResult:
        return self._set_option("forced_lang", forced_lang)

    def set_section_separator(self, section_separator: str) -> OperationResult:
        """Set the separator, e.g. 'ABC' turns section 'page' key 'title' into 'pageABCtitle'."""
        return self._set_option("section_separator", section_separator)

    def set_namespace(self, namespace: Optional[str]) -> OperationResult:
        """Set the module name the artifact is registered under; None disables it."""
        return self._set_option("namespace", namespace)

    def set_request_context(self, context: RequestContext) -> OperationResult:
        if self.is_initialized:
            return self._frozen_result("request_context")
        self._request_context = context
        return OperationResult.success(data=context)

    def _set_option(self, name: str, value: Any) -> OperationResult:
        if self.is_initialized:
            return self._frozen_result(name)
        self._options = replace(self._options, **{name: value})
        return OperationResult.success(data={name: value})

    def _frozen_result(self, name: str) -> OperationResult:
        logger.warning("setting_change_after_init", setting=name)
        return OperationResult.permanent_error(
            f"This I18n object is already initialized, so '{name}' can not be changed",
            error_code="already_initialized",
        )

    # Resolution

    def get_user_langs(self) -> List[str]:
        """Return the candidate languages for the current settings and request.

        Order: forced language, request ``lang``, session ``lang``,
        Accept-Language segments, fallback. Duplicates and illegal codes are
        removed.
        """
        context = self._request_context
        return resolve_candidates(
            forced=self._options.forced_lang,
            request_lang=context.request_lang,
            session_lang=context.session_lang,
            accept_language=context.accept_language,
            fallback=self._options.fallback_lang,
        )

    def init(self) -> Type[CompiledTranslations]:
        """Resolve the language, refresh the cache if needed and load it.

        Returns:
            The compiled translations class.

        Raises:
            AlreadyInitializedError: If init() already ran.
            NoLanguageFileFoundError: If no candidate has a source file.
            UnsupportedFormatError: If the source extension is not supported.
            MalformedSourceError: If a source cannot be parsed.
            InvalidIdentifierError: If a key, the prefix or the namespace
                cannot be used in the compiled artifact.
            CacheDirUnavailableError: If the cache directory cannot be created.
            CacheWriteFailedError: If the artifact cannot be written.
            CacheLoadError: If the artifact cannot be read or executed.
        """
        if self.is_initialized:
            logger.error("already_initialized")
            raise AlreadyInitializedError(
                "This I18n object is already initialized. "
                "It is not possible to init one object twice!"
            )

        self._state = I18nState.INITIALIZED
        opts = self._options

        validate_prefix(opts.prefix)
        if opts.namespace is not None:
            validate_namespace(opts.namespace)

        self._user_langs = self.get_user_langs()

        locator = SourceLocator(self.storage, opts.file_path)
        located = locator.locate(self._user_langs)
        self._applied_lang = located.applied_lang
        self._lang_file_path = located.path

        self._cache_file_path = CacheKeyBuilder().cache_file_path(
            opts.cache_path,
            located.path,
            opts.prefix,
            located.applied_lang,
            opts.namespace,
            section_separator=opts.section_separator,
            merge_fallback=opts.merge_fallback,
        )

        emitter = ArtifactEmitter(self.storage)
        emitter.ensure_directory(opts.cache_path)

        fallback_path = None
        if opts.merge_fallback:
            fallback_path = locator.path_for(opts.fallback_lang)
            if not self.storage.exists(fallback_path):
                logger.error("fallback_file_missing", path=fallback_path)
                raise NoLanguageFileFoundError(
                    f"Fallback language file '{fallback_path}' was not found",
                    candidates=[opts.fallback_lang],
                    path_template=opts.file_path,
                )

        oracle = CacheValidityOracle(self.storage)
        if oracle.is_stale(
            self._cache_file_path, located.path, fallback_path, opts.merge_fallback
        ):
            self._regenerate(located, fallback_path, emitter)
        else:
            logger.info("cache_reused", cache_path=self._cache_file_path)

        self._translations = self._load()
        logger.info(
            "i18n_initialized",
            applied_lang=self._applied_lang,
            cache_path=self._cache_file_path,
            entry_count=len(self._translations.__messages__),
        )
        return self._translations

    def _regenerate(
        self,
        located: LocatedSource,
        fallback_path: Optional[str],
        emitter: ArtifactEmitter,
    ) -> None:
        opts = self._options
        loader = FormatLoader(self.storage)

        translations: Dict[str, Any] = loader.load(located.path)
        if fallback_path is not None and fallback_path != located.path:
            translations = merge_translations(translations, loader.load(fallback_path))

        entries = KeyCompiler(opts.section_separator).compile(translations)
        artifact = emitter.emit(
            entries,
            opts.prefix,
            opts.namespace,
            applied_lang=located.applied_lang,
            source_path=located.path,
        )
        emitter.persist(self._cache_file_path, artifact)
        logger.info(
            "cache_regenerated",
            cache_path=self._cache_file_path,
            applied_lang=located.applied_lang,
            entry_count=len(entries),
        )

    def _load(self) -> Type[CompiledTranslations]:
        opts = self._options
        cache_file_path = self._cache_file_path
        module_name = opts.namespace or f"langcache_compiled_{opts.prefix}"

        try:
            source = self.storage.read(cache_file_path)
        except StorageError as e:
            logger.error("cache_read_failed", cache_path=cache_file_path, error=str(e))
            raise CacheLoadError(
                f"Could not read cache file '{cache_file_path}': {e}",
                path=cache_file_path,
            ) from e

        try:
            return load_artifact(
                source,
                cache_file_path,
                opts.prefix,
                module_name,
                register=opts.namespace is not None,
            )
        except (SyntaxError, LookupError) as e:
            logger.error("cache_load_failed", cache_path=cache_file_path, error=str(e))
            raise CacheLoadError(
                f"Could not load cache file '{cache_file_path}': {e}",
                path=cache_file_path,
            ) from e
