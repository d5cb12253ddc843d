"""Structured logging for mlmonitor (structlog).

``configure_logging`` takes the resolved :class:`Settings`, the same object
the app and CLI run with, so ``app.env``/``logging.level`` from YAML, ``.env``
or the environment all steer it the same way:

- ``app_env == "production"`` -> one JSON object per line
- anything else              -> coloured console output

Standard-library loggers (uvicorn, aiosqlite) are routed through the same
processor chain.  ``uvicorn.access`` is silenced because
``RequestLoggingMiddleware`` already emits one ``http_request`` event per
request, and aiosqlite's per-statement debug chatter is capped at WARNING.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from mlmonitor.config.settings import Settings

_DEFAULT_LEVEL = "INFO"

_QUIET_LOGGERS = {
    "uvicorn.access": logging.CRITICAL,
    "aiosqlite": logging.WARNING,
}


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def configure_logging(app_settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger from resolved settings.

    Args:
        app_settings: Resolved application settings.  When omitted (e.g. a
            logger used before startup) output is console-rendered at INFO.
    """
    level_name = (app_settings.log_level if app_settings else _DEFAULT_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    json_output = app_settings is not None and app_settings.app_env == "production"

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=[*_shared_processors(), renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name, floor in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(level, floor))


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
