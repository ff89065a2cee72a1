"""
Printing Context

Responsibilities:
- Loads the printer alias map
- Resolves aliases to physical printers and checks they are present
- Submits documents to the spooler
- Generates starter alias maps from installed printers

Owns: Printer names, print submission
Never: Decides whether a document is kept on disk
"""

from printagent.contexts.printing.cups import CupsOutputSink, CupsPrinterDirectory
from printagent.contexts.printing.exceptions import PrinterError, PrinterNotFoundError
from printagent.contexts.printing.printer_base import OutputSink, PrinterDirectory
from printagent.contexts.printing.printer_registry import PrinterAliasMap
from printagent.contexts.printing.resolution import PrintSubmission, resolve_printer, submit_print

__all__ = [
    "CupsOutputSink",
    "CupsPrinterDirectory",
    "OutputSink",
    "PrintSubmission",
    "PrinterAliasMap",
    "PrinterDirectory",
    "PrinterError",
    "PrinterNotFoundError",
    "resolve_printer",
    "submit_print",
]
