"""
Structured Logging
==================
structlog integration for business events (commits, template installs,
merged suggestions).

Usage:
    from shiftboard.utils.structured_logging import get_structured_logger

    log = get_structured_logger("shiftboard.workspace")
    log.info("workspace_committed", assignments=42, templates=3)
"""
import logging
import sys
from typing import Any

import structlog


def configure_structlog(json_output: bool = False, level: int = logging.INFO) -> None:
    """
    Configure structlog for the application.

    Args:
        json_output: If True, output JSON lines (for batch jobs).
                    If False, use console output, coloured on a terminal.
        level: Minimum level passed through the filtering logger.
    """
    if json_output:
        processors = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_structured_logger(name: str) -> Any:
    """
    Get a structured logger.

    Args:
        name: Logger name (e.g., "shiftboard.workspace")

    Returns:
        structlog bound logger
    """
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """
    Bind context variables for all subsequent log calls.

    Args:
        **kwargs: Context values (e.g., period="2024-W18")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()
