"""Structured logging setup.

Filters log through structlog loggers that wrap stdlib loggers, so
`logging` handlers and levels (and pytest's caplog) see every event.
configure_logging() picks the level and the renderer.
"""

import logging
import sys
from typing import Any

import structlog

from tablefilter.core.config import LoggingSettings


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog and the root stdlib logger.

    Example:
        settings = load_settings(Path("settings.yaml"))
        configure_logging(settings.logging)

    Args:
        settings: Level and renderer choice (defaults when None)
    """
    if settings is None:
        settings = LoggingSettings()
    log_level = logging.getLevelNamesMapping()[settings.level]

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(log_level)

    renderer: Any
    if settings.json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger writing through the stdlib logger `name`.

    Events are rendered by the processors installed with configure_logging()
    (structlog defaults before that) and then filtered by stdlib levels, so
    nothing below WARNING is emitted until logging is configured.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
