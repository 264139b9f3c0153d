"""Logging for the storefront.

stdlib logging owns the handlers; structlog renders key/value events on top.
Production and staging emit JSON, everything else the console renderer.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


def environment_name() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` if set, otherwise the level for the environment."""
    return os.getenv("LOG_LEVEL", _LEVELS.get(environment_name(), "INFO"))


def _handlers(log_dir: Path, level: str) -> list[logging.Handler]:
    log_dir.mkdir(exist_ok=True)
    rotating = logging.handlers.RotatingFileHandler(
        filename=log_dir / "storefront.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    console = logging.StreamHandler(sys.stdout)
    for handler in (console, rotating):
        handler.setLevel(level)
    return [console, rotating]


def configure_logging(log_dir: str = "logs") -> None:
    """Route stdlib and structlog output through the same handlers."""
    level = get_log_level()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = _handlers(Path(log_dir), level)
    logging.getLogger("protean").setLevel(logging.WARNING)

    if environment_name() in ("production", "staging"):
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers = [
            structlog.dev.ConsoleRenderer(
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
            )
        ]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *renderers,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_request_context(**values) -> None:
    """Attach ``values`` to every event logged for the current request."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
