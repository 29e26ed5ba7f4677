"""Structured logging configuration.

Events go to stderr so the JSON printed by scripts on stdout stays
machine-readable. Analysis and revision calls bind the page URL into the
contextvars, so every event emitted while a page is processed carries it.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from core.config import Settings, get_settings

SERVICE_NAME = "contentscope"

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


def add_service_name(_logger: Any, _method: str, event_dict: dict) -> dict:
    """Tag every event with the service name."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def build_processors(settings: Settings) -> list[Any]:
    """Processor chain for the current environment."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_service_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.is_production:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.set_exc_info)
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=not settings.is_test,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog and route stdlib logging to stderr."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def page_context(url: str, **extra: Any) -> Iterator[None]:
    """Bind the page URL (and any extra keys) to events logged inside the block."""
    with structlog.contextvars.bound_contextvars(page_url=url, **extra):
        yield
