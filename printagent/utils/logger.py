"""
Generic logger setup utilities.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers are defined in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"
)


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[dict] = None,
    level_colors: Optional[dict] = None,
    console: bool = True,
) -> Path:
    """
    Configure loguru for a context with provenance tracking.

    Sets up dual output (file + console) and logs execution provenance
    (script, command, working directory, Python version, etc.).

    Args:
        context_name: Context identifier (e.g., "agent", "printers")
        log_dir: Directory holding the log file
        extra_provenance: Additional key-value pairs for provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})
        console: Also log INFO and above to stdout (default: True)

    Returns:
        Path to log file

    Example:
        from printagent.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="agent",
            log_dir=Path("logs"),
            extra_provenance={"Queue": "queue/"}
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    # Remove default logger
    logger.remove()

    # Apply level colors (defaults + overrides)
    colors = {**LEVEL_COLORS, **(level_colors or {})}
    for level_name, color in colors.items():
        logger.level(level_name, color=color)

    # File handler captures everything; enqueue keeps writes safe across watcher threads
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", enqueue=True)

    if console:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[dict] = None) -> None:
    """
    Log execution provenance to current logger.

    Logs standard context (script, command, working directory, Python version)
    plus any additional context provided.

    Args:
        extra_context: Additional key-value pairs to log
    """
    logger.info("=" * 80)
    logger.info(f"Script: {sys.argv[0]}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    if extra_context:
        for key, value in extra_context.items():
            logger.info(f"{key}: {value}")

    logger.info("=" * 80)
