"""
Structured logging configuration using structlog.

Development gets coloured console lines; staging and production get one
JSON object per line. Stock quantities computed in floating point are
rounded before rendering so ledger log lines read as the stored values.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from foodworks.config.settings import get_settings

QUANTITY_DECIMALS = 6

# Third-party loggers that are too chatty at INFO. LoggingMiddleware
# already records every request.
QUIET_LOGGERS = ("uvicorn.access", "aiosqlite", "httpx", "httpcore")


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    settings = get_settings()
    event_dict["app"] = settings.app_name
    event_dict["environment"] = settings.environment
    return event_dict


def round_quantities(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Round float values, e.g. ``new_level=499.99999999999994`` to ``500.0``."""
    for key, value in event_dict.items():
        if isinstance(value, float):
            event_dict[key] = round(value, QUANTITY_DECIMALS)
    return event_dict


def _renderer(environment: str) -> list[Processor]:
    if environment == "development":
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def configure_logging(level: str | None = None) -> None:
    """Configure structlog and stdlib logging; ``level`` overrides LOG_LEVEL."""
    settings = get_settings()
    level = level or settings.log_level

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        round_quantities,
        *_renderer(settings.environment),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=getattr(logging, level))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
