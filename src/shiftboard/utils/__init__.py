"""Utilities package for Shiftboard."""
from .logging_setup import (
    TRACE,
    EngineLogger,
    get_logger,
    log_function_call,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_function_call",
    "EngineLogger",
    "TRACE",
]
