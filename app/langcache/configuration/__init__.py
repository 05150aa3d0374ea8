"""Configuration module - public API.

Centralized configuration for langcache using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Translation pipeline settings class

Example:
    ```python
    from langcache.configuration import settings

    template = settings.i18n.file_path
    if settings.is_production:
        # Production-specific logic...
    ```
"""

from langcache.configuration.i18n import I18nSettings
from langcache.configuration.settings import Settings, settings

__all__ = ["I18nSettings", "Settings", "settings"]
