"""Top-level langcache settings."""

from typing import Any, Optional

from pydantic import PrivateAttr

from langcache.configuration.base import LangcacheSettings
from langcache.configuration.i18n import I18nSettings


class Settings(LangcacheSettings):
    """Settings for an application embedding langcache.

    Environment Variables:
        ENVIRONMENT: Deployment name; "production" switches logs to JSON
            (default: development)
        LOG_LEVEL: Level for configure_logging() (default: INFO)

    The ``i18n`` section reads its own ``I18N_*`` variables on first access
    when it is not passed in explicitly, so an invalid ``I18N_*`` value only
    fails code that uses it.

    Example:
        ```python
        from langcache.configuration import settings

        settings.i18n.cache_path   # './langcache/'
        ```
    """

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    _i18n: Optional[I18nSettings] = PrivateAttr(default=None)

    def __init__(self, i18n: Optional[I18nSettings] = None, **kwargs: Any):
        super().__init__(**kwargs)
        self._i18n = i18n

    @property
    def i18n(self) -> I18nSettings:
        """Return the i18n section, reading it from the environment if needed.

        Raises:
            pydantic.ValidationError: If an ``I18N_*`` variable is invalid.
        """
        if self._i18n is None:
            self._i18n = I18nSettings()
        return self._i18n

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
