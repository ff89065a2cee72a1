"""
Printer capabilities consumed by the pipeline.

The pipeline owns printing decisions and error handling. Concrete
implementations talk to the spooler (CUPS, etc).
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional


class PrinterDirectory(ABC):
    """Reports the physical printers currently available."""

    @abstractmethod
    def list_printers(self) -> List[str]:
        """
        Return the names of available printers.

        Implementations should raise PrinterError when the listing fails.
        """
        raise NotImplementedError


class OutputSink(ABC):
    """Submits a rendered document to a physical printer."""

    @abstractmethod
    def print_file(self, file_path: Path, printer: Optional[str] = None, job_name: Optional[str] = None) -> None:
        """
        Submit `file_path` for printing.

        - `printer` is a physical printer name; None means the system default printer.
        - Implementations should raise PrinterError on failure.
        """
        raise NotImplementedError
