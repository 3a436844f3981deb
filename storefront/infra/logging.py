"""Structured logging for the storefront.

Every event carries the store name and environment. JSON lines are
emitted outside development; dev gets coloured console output.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from storefront.config import settings

# Libraries whose INFO output drowns out catalog events
NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "sqlalchemy.engine")


def add_service_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp each event with the store and environment it came from."""
    event_dict.setdefault("store", settings.store_name)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def build_processors(json_output: bool) -> list[Processor]:
    """Processor chain ending in a JSON or console renderer."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Configure structlog and stdlib logging.

    Args:
        level: Log level name; defaults to ``settings.log_level``
        json_output: Force JSON on or off; defaults to ``settings.log_json``
            outside the dev environment
    """
    if json_output is None:
        json_output = settings.log_json and settings.environment != "dev"
    numeric_level = logging.getLevelName((level or settings.log_level).upper())

    structlog.configure(
        processors=build_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Get a logger, optionally bound to ``initial_context``."""
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
