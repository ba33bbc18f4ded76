"""Structured logging helpers."""

from __future__ import annotations

import logging
import sys

import structlog


def resolve_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int = logging.WARNING, *, json_output: bool = False) -> None:
    # stderr keeps stdout clean for `--json` output.
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def ensure_default_logging() -> None:
    """Quiet defaults (WARNING, stderr) until `configure_logging` runs.

    structlog's own defaults print every level to stdout.
    """

    if structlog.is_configured():
        return
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


ensure_default_logging()

logger = structlog.get_logger()

__all__ = ["configure_logging", "ensure_default_logging", "logger", "resolve_level"]
