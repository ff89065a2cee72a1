"""Exceptions for the rendering context."""

from typing import List, Optional


class RenderError(RuntimeError):
    """
    Raised when the rendering engine cannot produce a PDF.

    Attributes:
        message: Error description
        engine: Engine executable that was invoked
        errors: Engine errors parsed from its log, when available
    """

    def __init__(
        self,
        message: str,
        engine: Optional[str] = None,
        errors: Optional[List[str]] = None,
    ):
        self.message = message
        self.engine = engine
        self.errors = list(errors or [])

        parts = [message]
        if engine:
            parts.append(f"Engine: {engine}")
        for error in self.errors[:5]:
            parts.append(f"  {error}")

        super().__init__("\n".join(parts))
