"""Constants shared by the i18n pipeline."""

from langcache import __version__

# Part of every cache key, so a new release never reuses older artifacts.
COMPILER_VERSION = f"langcache-{__version__}"

MAX_SECTION_DEPTH = 32

DEFAULT_FILE_PATH = "./lang/lang_{LANGUAGE}.ini"
DEFAULT_CACHE_PATH = "./langcache/"
DEFAULT_FALLBACK_LANG = "en"
DEFAULT_PREFIX = "L"
DEFAULT_SECTION_SEPARATOR = "_"
