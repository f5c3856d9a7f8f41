"""
Logging setup for pagezones.

Console logging goes through rich; ``use_rich=False`` keeps plain stream output
(for CI logs or when colour codes are unwanted).
"""

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_VALID_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for module.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if not name or not isinstance(name, str):
        raise ValueError("Logger name must be a non-empty string")
    return logging.getLogger(name)


def setup_logging(level: str = "INFO", use_rich: bool = True,
                  console: Optional[Console] = None) -> logging.Handler:
    """
    Setup logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_rich: Whether to use rich logging
        console: Console used by the rich handler (stderr by default)

    Returns:
        The handler installed on the root logger
    """
    if level.upper() not in _VALID_LEVELS:
        raise ValueError(f"Invalid log level: {level}")

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    return handler
