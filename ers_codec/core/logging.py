"""
Structured logging configuration using structlog.

The codec only emits events (``evidence_record_decoded`` and friends) through
``get_logger``; it never configures logging on import. An application that
embeds the codec calls ``configure_logging()`` once at startup, or skips it
and routes the ``ers_codec`` stdlib logger through its own setup.
"""

import logging
import sys
from typing import cast

import structlog
from structlog.types import Processor

from ers_codec.core.config import get_settings

CODEC_LOGGER_NAME = "ers_codec"


def configure_logging(log_level: str | None = None) -> None:
    """
    Configure structured logging for an application embedding the codec.

    Events below the active level are dropped by ``filter_by_level`` before
    any other processor runs, which keeps the per-record debug events cheap.
    Development renders to the console; staging and production render JSON.
    ``log_level`` overrides the configured level.
    """
    settings = get_settings()
    level = getattr(logging, (log_level or settings.log_level).upper())

    # Codec events carry keyword context only: no positional arguments,
    # stack info or byte values to post-process.
    shared_processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.environment == "development":
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [
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

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )
    logging.getLogger(CODEC_LOGGER_NAME).setLevel(level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance with the given name."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
