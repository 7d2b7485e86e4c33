"""
Shiftboard Logging
==================
stdlib logging for the ``shiftboard`` logger tree.

Levels in use:
    TRACE (5): every store write, engine entry points with their arguments
    DEBUG (10): one line per slot decision (suggestion picks, moves)
    INFO (20): per-pass summaries, workspace loads
    WARNING (30): declined moves, skipped template entries, duplicate records

The CLI keeps the console at WARNING and sends everything from DEBUG up to
a rotating file next to the data.
"""
import functools
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ROOT = "shiftboard"


class ColoredFormatter(logging.Formatter):
    """Colours the level name when the handler writes to a terminal."""

    COLORS = {
        TRACE: "\033[90m",
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_color: bool = False):
        super().__init__(fmt, datefmt)
        self.use_color = use_color

    def format(self, record):
        message = super().format(record)
        color = self.COLORS.get(record.levelno)
        if self.use_color and color:
            return f"{color}{message}{self.RESET}"
        return message


def _level(name) -> int:
    if isinstance(name, int):
        return name
    return TRACE if str(name).upper() == "TRACE" else getattr(logging, str(name).upper(), logging.INFO)


def setup_logging(
    console_level="WARNING",
    log_file: Optional[str] = None,
    file_level="DEBUG",
    max_bytes: int = 1024 * 1024,
    backup_count: int = 2,
) -> logging.Logger:
    """
    Configure the ``shiftboard`` logger.

    Calling it again replaces the handlers, so the CLI can run several
    commands in one process.

    Args:
        console_level: Threshold for stderr output
        log_file: Rotating log file path, or None for console only
        file_level: Threshold for the log file
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files kept

    Returns:
        The ``shiftboard`` logger
    """
    logger = logging.getLogger(ROOT)
    logger.setLevel(TRACE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(_level(console_level))
    console.setFormatter(ColoredFormatter(
        "%(levelname)s %(name)s: %(message)s",
        use_color=sys.stderr.isatty(),
    ))
    logger.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        file_handler.setLevel(_level(file_level))
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _short(value: Any) -> str:
    """Compact argument rendering: collections by size, everything else by repr."""
    if isinstance(value, (list, tuple, set, dict)):
        return f"<{type(value).__name__} of {len(value)}>"
    label = getattr(value, "label", None)
    if isinstance(label, str):
        return label
    text = repr(value)
    return text if len(text) <= 60 else text[:57] + "..."


def log_function_call(func: Callable) -> Callable:
    """
    Log entry, result size and failures of an engine entry point at TRACE.

    Exceptions are logged at ERROR and re-raised unchanged.
    """
    logger = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if logger.isEnabledFor(TRACE):
            rendered = [_short(a) for a in args] + [f"{k}={_short(v)}" for k, v in kwargs.items()]
            logger.log(TRACE, f"{func.__name__}({', '.join(rendered)})")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"{func.__name__} failed: {type(e).__name__}: {e}")
            raise
        logger.log(TRACE, f"{func.__name__} -> {_short(result)}")
        return result

    return wrapper


class EngineLogger:
    """Pass-level logging: a header per pass, a line per slot, raw state at TRACE."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def phase(self, name: str):
        self.logger.info(f"-- {name} --")

    def step(self, description: str):
        self.logger.debug(f"  {description}")

    def detail(self, key: str, value: Any):
        self.logger.log(TRACE, f"  {key}: {value}")
