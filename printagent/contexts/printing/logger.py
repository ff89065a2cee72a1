"""
Printing context logger.

Provides logging interface for printing context with automatic [print] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[print]"


def _log_info(message: str) -> None:
    """Log info message with [print] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [print] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [print] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
