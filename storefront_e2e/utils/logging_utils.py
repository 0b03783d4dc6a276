"""Central logging configuration using a Loguru stderr sink."""

from __future__ import annotations

import logging
import sys

from loguru import logger as loguru_logger

_HUMAN_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "{extra[logger_name]} | {message}"
)


class InterceptHandler(logging.Handler):
    """Forward stdlib log records into loguru, keeping the logger name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        loguru_logger.bind(logger_name=record.name).opt(exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(level: str = "INFO", serialize: bool = False) -> None:
    """Route stdlib logging through a single loguru stderr sink.

    With ``serialize`` the sink emits one JSON object per record, which is what
    CI log collectors want; otherwise a compact coloured line format is used.
    """
    loguru_logger.remove()
    loguru_logger.configure(extra={"logger_name": "storefront-e2e"})
    loguru_logger.add(
        sys.stderr,
        level=level.upper(),
        format=_HUMAN_FORMAT,
        serialize=serialize,
        enqueue=False,
        backtrace=False,
        diagnose=False,
    )
    logging.basicConfig(
        handlers=[InterceptHandler()],
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Create a namespaced logger for a suite component."""
    return logging.getLogger(f"storefront-e2e.{name}")
