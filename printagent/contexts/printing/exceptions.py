"""Exceptions for the printing context."""


class PrinterError(RuntimeError):
    """Raised when a printer cannot be found or cannot accept a print request."""


class PrinterNotFoundError(PrinterError):
    """Raised when the resolved printer is absent from the live printer list."""

    def __init__(self, printer_name: str, available=()):
        self.printer_name = printer_name
        self.available = list(available)
        super().__init__(
            f"Printer not found: {printer_name} (available: {', '.join(self.available) or 'none'})"
        )
