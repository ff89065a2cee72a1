"""CUPS-backed printer directory and output sink using the `lpstat` and `lp` commands."""

import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from printagent.contexts.printing.exceptions import PrinterError
from printagent.contexts.printing.printer_base import OutputSink, PrinterDirectory


def _require_command(command: str) -> None:
    if shutil.which(command) is None:
        raise PrinterError(f"CUPS not available: '{command}' not found in PATH")


class CupsPrinterDirectory(PrinterDirectory):
    """Lists CUPS destinations with `lpstat -e`."""

    def __init__(self, lpstat_path: str = "lpstat", timeout: float = 30.0) -> None:
        self._lpstat_path = lpstat_path
        self._timeout = timeout

    def list_printers(self) -> List[str]:
        _require_command(self._lpstat_path)

        try:
            proc = subprocess.run(
                [self._lpstat_path, "-e"],
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise PrinterError(f"lpstat failed: {e}") from e

        if proc.returncode != 0:
            out = (proc.stdout or "") + (proc.stderr or "")
            # lpstat exits non-zero when no destinations exist
            if "no destinations" in out.lower():
                return []
            raise PrinterError(f"lpstat failed (rc={proc.returncode}): {out.strip()}")

        return [line.strip() for line in proc.stdout.splitlines() if line.strip()]


class CupsOutputSink(OutputSink):
    """
    CUPS-backed output sink using the `lp` command.

    Fire-and-forget submission: success means the spooler accepted the job.
    """

    def __init__(
        self,
        lp_path: str = "lp",
        extra_args: Optional[Sequence[str]] = None,
        timeout: float = 60.0,
    ) -> None:
        self._lp_path = lp_path
        self._extra_args = list(extra_args or [])
        self._timeout = timeout

    def print_file(self, file_path: Path, printer: Optional[str] = None, job_name: Optional[str] = None) -> None:
        _require_command(self._lp_path)

        if not file_path.is_file():
            raise PrinterError(f"Print file does not exist: {file_path}")

        cmd = [self._lp_path]
        if printer:
            cmd += ["-d", printer]
        cmd += ["-t", job_name or file_path.name, *self._extra_args, str(file_path)]

        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self._timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            raise PrinterError(f"lp failed: {e}") from e

        if proc.returncode != 0:
            out = (proc.stdout or "") + (proc.stderr or "")
            raise PrinterError(f"lp failed (rc={proc.returncode}): {out.strip()}")
