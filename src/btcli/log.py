"""Logging setup: structlog on top of the standard library logging module.

Log records always go to stderr, never to the shell's output sinks.
Nothing is configured until ``configure_logging`` runs; before that the
loggers fall through to the standard library defaults.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.dev import ConsoleRenderer
from structlog.stdlib import BoundLogger
from structlog.types import Processor

DEFAULT_LEVEL = "WARNING"

_shared_processors: list[Processor] = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]


def coerce_level(level: str | int) -> int:
    """Translate a level name or number into the numeric logging level."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if isinstance(resolved, str):
            raise ValueError(f"Invalid log level: {level}")
        return int(resolved)
    return int(level)


def configure_logging(level: str | int = DEFAULT_LEVEL) -> None:
    """Send btcli logs to stderr through the console renderer."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=ConsoleRenderer(colors=False),
            foreign_pre_chain=_shared_processors,
        )
    )
    logging.basicConfig(level=coerce_level(level), handlers=[handler], force=True)
    logging.captureWarnings(True)


def get_logger(name: str) -> BoundLogger:
    """Return a structlog logger for ``name`` backed by the stdlib logger of that name."""
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=BoundLogger)
