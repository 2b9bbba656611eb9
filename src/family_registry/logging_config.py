"""Structured logging for Family Registry using structlog.

Console output is used in development and JSON lines in production. Request
handlers bind a request id, and the aggregate manager binds the family id
and operation, so every log line from one call can be correlated.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from family_registry.config import Settings, get_settings

# Loggers that emit one line per request or connection.
_CHATTY_LOGGERS = ("httpcore", "httpx", "uvicorn.access", "asyncio")


def _add_service_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp each JSON record with the service name, version and environment."""
    settings = get_settings()
    event_dict.setdefault("service", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    event_dict.setdefault("environment", settings.environment.value)
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def build_processors(log_format: str) -> list[Processor]:
    """Return the processor chain for ``"console"`` or ``"json"`` output."""
    if log_format == "json":
        return [
            *_shared_processors(),
            _add_service_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        *_shared_processors(),
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Call once at startup, before the first log call.
    """
    if settings is None:
        settings = get_settings()

    level = getattr(logging, settings.log_level.value)

    structlog.configure(
        processors=build_processors(settings.log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    if settings.log_file:
        _add_file_handler(settings.log_file, level)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def _add_file_handler(log_file: Path, level: int) -> None:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logging.getLogger().addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Example:
        logger = get_logger(__name__)
        logger.info("family_created", family_id=family.id, service_id=family.service_id)
    """
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind values to every later log call in the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


@contextmanager
def family_context(family_id: int | None, operation: str) -> Iterator[None]:
    """Bind ``family_id`` and ``operation`` for the duration of a manager call.

    Example:
        with family_context(7, "update"):
            logger.info("family_updated")
    """
    with structlog.contextvars.bound_contextvars(
        family_id=family_id, operation=operation
    ):
        yield
