"""Exceptions raised while reading job descriptor files."""

from pathlib import Path
from typing import Optional


class MalformedJobError(ValueError):
    """
    Raised when a job file cannot be decoded into a job descriptor.

    Attributes:
        message: Error description
        source_file: Path of the job file, when known
        original_error: The underlying decoding error, when there is one
    """

    def __init__(
        self,
        message: str,
        source_file: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.source_file = source_file
        self.original_error = original_error

        parts = [message]
        if source_file:
            parts.append(f"File: {source_file}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
