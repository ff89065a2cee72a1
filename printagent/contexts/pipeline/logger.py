"""
Pipeline context logger.

Provides logging interface for the job pipeline with automatic [pipeline] prefix.
"""

from pathlib import Path

from loguru import logger

from printagent.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[pipeline]"


def setup_agent_logger(log_dir: Path, extra_provenance: dict = None) -> Path:
    """
    Setup logger for the agent process.

    Args:
        log_dir: Directory for agent.log
        extra_provenance: Additional provenance lines (queue, output, engine...)

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="agent", log_dir=log_dir, extra_provenance=extra_provenance)


def _log_info(message: str) -> None:
    """Log info message with [pipeline] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [pipeline] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [pipeline] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [pipeline] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [pipeline] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
