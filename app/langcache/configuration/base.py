"""Base class shared by every langcache settings class."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class LangcacheSettings(BaseSettings):
    """Settings read from the process environment and a local ``.env`` file.

    Variable names are matched exactly; unknown variables are ignored so the
    settings can share an environment with the host application.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
