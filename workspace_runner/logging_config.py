"""Logging configuration for the workspace runner.

The package only emits records on the ``workspace_runner`` logger tree.
Hosts that want them on stderr call ``configure_logging(config)`` once at
startup; the level comes from ``RunnerConfig.log_level`` (and so from
WORKSPACE_RUNNER_LOG_LEVEL or runner.json).

Provides:
- Level-dependent formats (WARNING, INFO, DEBUG)
- Colored level names on terminals
- Phase timing logs
"""

import logging
import sys
import time
from contextlib import contextmanager
from typing import IO, Optional

from .constants import LOGGER_NAME

# Format per effective level; DEBUG adds the source line
FORMATS = {
    logging.DEBUG: "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s",
    logging.INFO: "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
}
DEFAULT_FORMAT = "%(levelname)s: %(message)s"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name for terminal output."""

    COLORS = {
        logging.DEBUG: "\033[36m",     # Cyan
        logging.INFO: "\033[32m",      # Green
        logging.WARNING: "\033[33m",   # Yellow
        logging.ERROR: "\033[31m",     # Red
        logging.CRITICAL: "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno)
        if color is None:
            return super().format(record)

        levelname = record.levelname
        record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(level: str = "WARNING", stream: Optional[IO[str]] = None) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling it again replaces the previous handler.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream (default: stderr); colored only if a tty

    Returns:
        The configured ``workspace_runner`` logger
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    if stream is None:
        stream = sys.stderr

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(numeric_level)

    log_format = FORMATS.get(numeric_level, DEFAULT_FORMAT)
    isatty = getattr(stream, "isatty", None)
    if isatty is not None and isatty():
        formatter = ColoredFormatter(log_format)
    else:
        formatter = logging.Formatter(log_format)

    handler = logging.StreamHandler(stream)
    handler.setLevel(numeric_level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logger.info(f"Logging configured: level={logging.getLevelName(numeric_level)}")
    return logger


def configure_logging(config, stream: Optional[IO[str]] = None) -> logging.Logger:
    """Set up package logging from a RunnerConfig's ``log_level``."""
    return setup_logging(config.log_level, stream=stream)


@contextmanager
def log_timing(operation: str, logger: Optional[logging.Logger] = None):
    """Log how long a block took, at DEBUG, even if it raises.

    Example:
        with log_timing("Launching apps", logger):
            await self._launch_apps(workspace, stats)
    """
    if logger is None:
        logger = logging.getLogger(LOGGER_NAME)

    start = time.perf_counter()
    logger.debug(f"Starting: {operation}")

    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"{operation} completed in {elapsed_ms:.2f}ms")
