"""Logging utilities for cilint.

This module provides a standalone structlog logger factory that writes
JSON-formatted or text-formatted logs to a log file or to stderr. The logger
is self-contained and does not modify global structlog configuration.

The log file is opened by the caller with :func:`open_log_file` and closed
by the caller once the command is done.
"""

import logging
import sys
from os import getenv
from pathlib import Path
from typing import Literal, TextIO, cast

import structlog
from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, GCL_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("GCL_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.WARNING)


def open_log_file(log_file_path: str | Path) -> TextIO:
    """Open a log file in append mode, creating its parent directories.

    Raises:
        OSError: If the file or its directory cannot be created.
    """
    log_path = Path(log_file_path).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return log_path.open("a", encoding="utf-8")


def _create_logger(
    stream: TextIO,
    *,
    log_level: int,
    log_format: LogFormatType = "json",
) -> FilteringBoundLogger:
    """Create a standalone structlog logger.

    Args:
        stream: Where entries are written. Not closed by the logger.
        log_level: Minimum level of emitted entries.
        log_format: Output format, either "json" or "text".

    Returns:
        A configured FilteringBoundLogger instance.
    """
    logger_factory = structlog.WriteLoggerFactory(file=stream)

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            logger_factory(),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            context_class=dict,
        ),
    )


def create_cli_logger(
    *,
    level: str = "warning",
    log_format: LogFormatType = "text",
    log_stream: TextIO | None = None,
    verbose: bool = False,
    command: str = "",
) -> FilteringBoundLogger:
    """Create a logger for CLI commands.

    Writes to ``log_stream`` when given, otherwise to stderr. Entries written
    to stderr always use the text format.

    The log level is determined by (in order of precedence):
    1. GCL_DEBUG environment variable (if set, enables DEBUG level)
    2. ``verbose`` (if True, enables DEBUG level)
    3. The ``level`` parameter

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_stream: Open log file from :func:`open_log_file` (stderr if None).
        verbose: Lower the threshold to DEBUG.
        command: Name of the CLI command, bound to all entries.

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    effective_level = _log_level_from_string(
        "debug" if verbose else level, respect_env=True
    )

    logger = _create_logger(
        log_stream if log_stream is not None else sys.stderr,
        log_level=effective_level,
        log_format=log_format if log_stream is not None else "text",
    )

    if command:
        return logger.bind(command=command)
    return logger
