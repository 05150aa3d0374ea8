"""Structlog setup for langcache.

Library modules log through get_module_logger(). Applications embedding
langcache call configure_logging() once at startup to choose the level and
the renderer: console output in development, JSON lines in production.

Usage:
    from langcache.logging import configure_logging, get_module_logger

    configure_logging(log_level="DEBUG")

    logger = get_module_logger()
    logger.info("cache_regenerated", cache_path="langcache/i18n_..._L_de.py")

Dependencies:
    - langcache.configuration.settings (LOG_LEVEL, ENVIRONMENT)
"""

import inspect
import logging
import sys
from types import FrameType
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from langcache.configuration import settings

LOGGER_NAME = "langcache"

# Above CRITICAL, so nothing is emitted.
SILENT = logging.CRITICAL + 1


def _running_under_pytest() -> bool:
    return "pytest" in sys.modules


def _processors(prod_mode: bool) -> List[Processor]:
    renderer: Processor
    if prod_mode:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog on top of the stdlib root logger.

    Under pytest the processors are reduced to a key=value renderer and the
    root level is set above CRITICAL, so log calls succeed without output.

    Args:
        log_level: Level name such as DEBUG or WARNING (default:
            settings.LOG_LEVEL). Unknown names fall back to INFO.
        is_production: Render JSON instead of console output (default:
            settings.is_production).

    Returns:
        Logger named "langcache".
    """
    if _running_under_pytest():
        processors: List[Processor] = [
            structlog.stdlib.add_log_level,
            structlog.processors.KeyValueRenderer(),
        ]
        level = SILENT
    else:
        prod_mode = settings.is_production if is_production is None else is_production
        processors = _processors(prod_mode)
        level_name = (log_level or settings.LOG_LEVEL).upper()
        level = getattr(logging, level_name, logging.INFO)

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, force=level == SILENT)

    return structlog.stdlib.get_logger(LOGGER_NAME)


logger: BoundLogger = configure_logging()


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Return a logger bound to name, or to the calling module without one."""
    if name:
        return logger.bind(logger_name=name)
    return _bind_module(inspect.currentframe())


def get_module_logger() -> BoundLogger:
    """Return a logger bound to the calling module.

    The logger carries ``module_path`` (the dotted module name) and
    ``component`` (its last part), e.g. ``langcache.i18n.cache`` and ``cache``.
    """
    return _bind_module(inspect.currentframe())


def _bind_module(frame: Optional[FrameType]) -> BoundLogger:
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    module_path = module.__name__
    return logger.bind(
        component=module_path.rpartition(".")[2],
        module_path=module_path,
    )
