"""Custom exceptions for the i18n pipeline.

Every failure aborts the current I18n.init() call. Each exception carries
the path, key or language involved so the cause can be diagnosed from the
error alone.
"""

from typing import Optional, Sequence


class I18nError(Exception):
    """Base exception for all i18n pipeline errors.

    Example:
        try:
            i18n.init()
        except I18nError as e:
            logger.error("i18n_init_failed", error=str(e))
    """

    pass


class AlreadyInitializedError(I18nError):
    """Raised when init() is called on an I18n object that is already initialized.

    Example:
        >>> i18n.init()
        >>> i18n.init()
        Traceback (most recent call last):
        ...
        AlreadyInitializedError: This I18n object is already initialized
    """

    pass


class NoLanguageFileFoundError(I18nError):
    """Raised when no candidate language has a source file.

    Attributes:
        candidates: Language codes that were tried, in priority order.
        path_template: Template the candidate paths were built from.
    """

    def __init__(
        self,
        message: str,
        candidates: Sequence[str] = (),
        path_template: Optional[str] = None,
    ):
        super().__init__(message)
        self.candidates = list(candidates)
        self.path_template = path_template


class SourceUnavailableError(I18nError):
    """Raised when a located source file cannot be read or inspected.

    Attributes:
        path: Path of the source file.
    """

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class UnsupportedFormatError(I18nError):
    """Raised when a source file extension has no registered parser.

    Attributes:
        path: Path of the source file.
        extension: The unsupported extension.
    """

    def __init__(self, message: str, path: str, extension: str):
        super().__init__(message)
        self.path = path
        self.extension = extension


class MalformedSourceError(I18nError):
    """Raised when a source file cannot be parsed into a mapping.

    Attributes:
        path: Path of the source file, if known.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class SectionDepthExceededError(MalformedSourceError):
    """Raised when sections are nested deeper than the allowed maximum."""

    pass


class InvalidIdentifierError(I18nError):
    """Raised when a translation key cannot become an attribute of the compiled class.

    Attributes:
        key: The offending flattened key.
    """

    def __init__(self, message: str, key: str):
        super().__init__(message)
        self.key = key


class CacheDirUnavailableError(I18nError):
    """Raised when the cache directory does not exist and cannot be created.

    Attributes:
        path: The cache directory.
    """

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class CacheWriteFailedError(I18nError):
    """Raised when a compiled artifact cannot be written.

    Attributes:
        path: Path of the cache artifact.
    """

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class CacheLoadError(I18nError):
    """Raised when a cache artifact cannot be read or executed.

    Attributes:
        path: Path of the cache artifact.
    """

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path
