"""langcache - language resolution and compiled translation cache.

Resolves the preferred language from ranked request signals, finds the
matching translation source and compiles it into a cached Python module.

Example:
    from langcache.i18n import I18n

    i18n = I18n(file_path="lang/{LANGUAGE}.yml", cache_path="langcache/")
    i18n.set_forced_lang("de")
    L = i18n.init()
    L.get("greeting", ["David"])
"""

__version__ = "1.0.0"
