"""Structured logging infrastructure.

Centralized structlog configuration for langcache.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module

Example:
    from langcache.logging import get_module_logger

    logger = get_module_logger()
    logger.info("cache_regenerated", cache_path="langcache/i18n_....py")
"""

from langcache.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_module_logger",
]
