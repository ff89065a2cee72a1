"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[render]"


# Wrapper functions with automatic [render] prefix


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_compilation_start(job_name: str, engine: str, working_dir: Path) -> None:
    """Log start of compilation with context."""
    _log_debug(f"Compiling {job_name} with {engine} in {working_dir}")


def log_compilation_result(
    job_name: str,
    result,  # CompilationResult
    elapsed_time: float,
) -> None:
    """
    Log compilation result with diagnostics.

    Args:
        job_name: Job identifier
        result: CompilationResult from compile_latex()
        elapsed_time: Time taken to compile
    """
    if result.success:
        pages = f", {result.page_count} page(s)" if result.page_count else ""
        _log_success(
            f"{job_name}: compiled with {len(result.warnings)} warnings ({elapsed_time:.2f}s{pages})"
        )
    else:
        _log_error(f"{job_name}: {len(result.errors)} errors ({elapsed_time:.2f}s)")
        for i, err in enumerate(result.errors[:5], 1):
            _log_error(f"  Error {i}: {err}")
        if len(result.errors) > 5:
            _log_error(f"  ... and {len(result.errors) - 5} more errors")

    for i, warn in enumerate(result.warnings[:3], 1):
        _log_debug(f"  Warning {i}: {warn}")

    # Full engine output on failure; opt(raw=True) keeps multi-line output unformatted
    if not result.success and result.stdout:
        logger.opt(raw=True).debug(
            f"\n{'=' * 80}\nENGINE STDOUT:\n{'=' * 80}\n{result.stdout}\n"
        )
