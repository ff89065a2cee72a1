"""
Printer resolution and print submission.

An explicit alias is resolved through the alias map and must appear in the
live printer list before submission. Jobs without an alias go to the
spooler's default printer and skip the existence check.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from printagent.contexts.printing.exceptions import PrinterNotFoundError
from printagent.contexts.printing.logger import _log_debug, _log_info, _log_success
from printagent.contexts.printing.printer_base import OutputSink, PrinterDirectory
from printagent.contexts.printing.printer_registry import PrinterAliasMap


@dataclass(frozen=True)
class PrintSubmission:
    """A completed print submission. printer is None for the default printer."""

    requested_alias: Optional[str]
    printer: Optional[str]


def resolve_printer(alias: Optional[str], alias_map: PrinterAliasMap) -> Optional[str]:
    """
    Physical printer name for an optional alias.

    Returns None when no alias was given (use the default printer).
    """
    if not alias:
        return None
    return alias_map.resolve(alias)


def submit_print(
    pdf_path: Path,
    alias: Optional[str],
    alias_map: PrinterAliasMap,
    directory: PrinterDirectory,
    sink: OutputSink,
    job_name: Optional[str] = None,
) -> PrintSubmission:
    """
    Resolve the printer and submit a document to it.

    Raises:
        PrinterNotFoundError: If an explicitly requested printer is not available
        PrinterError: If listing printers or submitting the job fails
    """
    printer = resolve_printer(alias, alias_map)

    if printer is not None:
        available = directory.list_printers()
        if printer not in available:
            raise PrinterNotFoundError(printer, available)
        if printer != alias:
            _log_debug(f"Alias '{alias}' resolved to '{printer}'")

    _log_info(f"Printing {pdf_path.name} on {printer or 'default printer'}...")
    sink.print_file(pdf_path, printer=printer, job_name=job_name)
    _log_success(f"Printed {pdf_path.name}")

    return PrintSubmission(requested_alias=alias, printer=printer)
