"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Optional, TextIO

import structlog


def _stderr_logger_factory(*args) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger so redirected streams are honored
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(
    level: str = "WARNING",
    json_format: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure structured logging for the engine.

    Library modules never call this; entry points (the CLI, a host
    application) do.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, output JSON; if False, output console format
        stream: Where log lines go (default: stderr, so stdout stays clean
            for command output)

    Raises:
        ValueError: If the level name is not a logging level
    """
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level {level!r}")

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=log_level,
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_format:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    if stream is None:
        logger_factory = _stderr_logger_factory
    else:
        logger_factory = structlog.PrintLoggerFactory(file=stream)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=logger_factory,
        # Module-level loggers are created at import time; they must pick
        # up whatever configuration is active when they are used.
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Optional logger name (usually __name__)

    Returns:
        structlog logger
    """
    return structlog.get_logger(name)
