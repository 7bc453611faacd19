"""Logging utilities for WOODC.

This module provides standalone structlog logger factories writing
JSON-formatted or text-formatted logs to a stream or a log file. Each
logger is self-contained and does not modify global structlog configuration.
"""

import logging
import sys
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TextIO, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def _get_log_level() -> int:
    """Get the log level from environment variables.

    Checks WOODC_DEBUG first (sets DEBUG if present), then WOODC_LOG_LEVEL.
    Defaults to WARNING if neither is set.

    Returns:
        The logging level as an integer.
    """
    if getenv("WOODC_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(getenv("WOODC_LOG_LEVEL", "warning").upper(), logging.WARNING)


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, WOODC_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("WOODC_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _create_logger(
    output: TextIO,
    *,
    log_level: int | None = None,
    log_format: LogFormatType = "json",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger writing to the given stream.

    Args:
        output: Text stream receiving rendered log lines.
        log_level: Override log level (uses env vars if not specified).
        log_format: Output format, either "json" or "text".

    Returns:
        A configured FilteringBoundLogger instance.
    """
    effective_level = log_level if log_level is not None else _get_log_level()

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

    # wrap_logger keeps the global structlog configuration untouched
    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.WriteLoggerFactory(file=output)(),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(effective_level),
            context_class=dict,
        ),
    )


def get_logger(name: str) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a library logger writing text-formatted logs to stderr.

    The log level is taken from WOODC_DEBUG or WOODC_LOG_LEVEL and defaults
    to WARNING, so builds stay quiet unless asked otherwise.

    Args:
        name: Logger name, bound to every entry.

    Returns:
        A FilteringBoundLogger instance.
    """
    return _create_logger(sys.stderr, log_format="text").bind(logger=name)


def create_cli_logger(
    *,
    level: str = "warning",
    log_format: LogFormatType = "text",
    log_file: str = "",
    command: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for CLI commands.

    Writes to the given log file (created with its parent directories) or
    to stderr when no file is configured. The command name is bound to all
    log entries.

    The log level can be overridden by environment variables:
    - WOODC_DEBUG: If set, enables DEBUG level logging regardless of config

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (stderr if empty).
        command: Name of the CLI command for context.

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    output: TextIO = sys.stderr
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        output = log_path.open("a", encoding="utf-8")

    logger = _create_logger(
        output,
        log_level=_log_level_from_string(level, respect_env=True),
        log_format=log_format,
    )
    if command:
        return logger.bind(command=command)
    return logger
