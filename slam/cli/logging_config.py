"""Logging configuration for the slam CLI.

Provides:
- Configurable log levels (WARNING, INFO, DEBUG)
- Subprocess call logging
- Colored output on terminals
"""

import logging
import sys
from typing import Any, Optional, Sequence


# Default log format
DEFAULT_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"

LOGGER_NAME = "slam"


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        """Format log record with colors."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Configure the ``slam`` logger.

    Args:
        verbose: Enable verbose logging (INFO level)
        debug: Enable debug logging (DEBUG level)

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logging(verbose=True)
        >>> logger.info("Loading layouts")
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Remove existing handlers
    logger.handlers.clear()

    if debug:
        logger.setLevel(logging.DEBUG)
        log_format = DEBUG_FORMAT
    elif verbose:
        logger.setLevel(logging.INFO)
        log_format = VERBOSE_FORMAT
    else:
        logger.setLevel(logging.WARNING)
        log_format = DEFAULT_FORMAT

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logger.level)

    # Use colored formatter if terminal supports it
    if sys.stderr.isatty():
        formatter = ColoredFormatter(log_format)
    else:
        formatter = logging.Formatter(log_format)

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def log_subprocess_call(cmd: Sequence[str], result: Any, logger: logging.Logger) -> None:
    """Log subprocess call with result.

    Args:
        cmd: Command list
        result: subprocess.CompletedProcess result
        logger: Logger instance
    """
    logger.debug(f"Subprocess call: {' '.join(str(part) for part in cmd)}")
    logger.debug(f"  Return code: {result.returncode}")

    if getattr(result, 'stdout', None):
        stdout = result.stdout if isinstance(result.stdout, str) else result.stdout.decode(errors="replace")
        logger.debug(f"  stdout: {stdout[:200]}")

    if getattr(result, 'stderr', None):
        stderr = result.stderr if isinstance(result.stderr, str) else result.stderr.decode(errors="replace")
        logger.debug(f"  stderr: {stderr[:200]}")


# Global logger instance
_logger: Optional[logging.Logger] = None


def init_logging(verbose: bool = False, debug: bool = False) -> None:
    """Initialize global logging."""
    global _logger
    _logger = setup_logging(verbose=verbose, debug=debug)


def get_global_logger() -> logging.Logger:
    """Get global logger instance, configuring defaults on first use."""
    global _logger
    if _logger is None:
        _logger = setup_logging()
    return _logger
