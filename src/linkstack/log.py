"""Structured logging configuration using structlog.

Call setup_logging() once at application startup before any log calls.
Library modules only ever call ``structlog.get_logger(__name__)``; until
setup_logging() runs, structlog's defaults apply.
"""

from __future__ import annotations

import logging
import os

import structlog


def setup_logging(*, json_output: bool = False, log_level: str = None) -> None:
    """Configure structlog for linkstack actors.

    Args:
        json_output: If True, render logs as JSON. If False, use dev-friendly console output.
        log_level: Minimum log level to emit (DEBUG, INFO, WARNING, ERROR).
            Defaults to the LINKSTACK_LOG_LEVEL environment variable, or INFO.
    """

    if log_level is None:
        log_level = os.environ.get("LINKSTACK_LOG_LEVEL", "INFO")

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {log_level!r}")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
