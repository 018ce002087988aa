import logging
import sys
from typing import Any

import structlog

from lexicon.core.config import settings

# Third-party loggers that are too chatty at INFO for request logs
_QUIET_LOGGERS = ("passlib", "sqlalchemy.engine.Engine", "uvicorn.access")


def _resolve_level(level: str | None) -> int:
    name = level or settings.LOG_LEVEL
    if name:
        resolved = logging.getLevelName(name.upper())
        if isinstance(resolved, int):
            return resolved
    return logging.DEBUG if settings.DEBUG else logging.INFO


def _add_service(
    _logger: Any, _method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", settings.PROJECT_NAME)
    return event_dict


def setup_logging(level: str | None = None) -> None:
    """Route stdlib and structlog output through one renderer.

    Args:
        level: Level name overriding LOG_LEVEL and DEBUG, e.g. "WARNING"
    """
    log_level = _resolve_level(level)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    processors: list[Any]
    if settings.ENVIRONMENT == "local":
        processors = [*shared_processors, structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = [
            *shared_processors,
            _add_service,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
