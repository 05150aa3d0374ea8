"""Factory functions for creating i18n components.

Provides convenience functions for building I18n objects from the
application settings.
"""

from typing import Optional

from langcache.configuration import I18nSettings, settings as app_settings
from langcache.i18n.resolvers import RequestContext
from langcache.i18n.service import I18n
from langcache.logging import get_module_logger
from langcache.storage import StorageBackend

logger = get_module_logger()


def create_i18n(
    settings: Optional[I18nSettings] = None,
    storage: Optional[StorageBackend] = None,
    request_context: Optional[RequestContext] = None,
    preload: bool = False,
) -> I18n:
    """Create and configure an I18n instance.

    Args:
        settings: I18n settings (default: ``settings.i18n`` from the
            environment).
        storage: Storage backend (default: local filesystem).
        request_context: Request signals used for language resolution.
        preload: Whether to call init() before returning.

    Returns:
        I18n: Configured instance, initialized when preload is set.

    Usage:
        # Resolve for a request and load immediately
        i18n = create_i18n(
            request_context=RequestContext.from_wsgi_environ(environ),
            preload=True,
        )
        L = i18n.translations

        # Adjust settings before init
        i18n = create_i18n()
        i18n.set_forced_lang("de")
        L = i18n.init()
    """
    settings = settings or app_settings.i18n
    i18n = I18n.from_settings(settings, storage=storage, request_context=request_context)

    if preload:
        i18n.init()
        logger.info(
            "i18n_created_with_preload",
            applied_lang=i18n.applied_lang,
            cache_file_path=i18n.cache_file_path,
        )
    else:
        logger.info("i18n_created_lazy", file_path=settings.file_path)

    return i18n
