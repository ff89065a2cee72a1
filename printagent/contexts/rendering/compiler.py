"""
LaTeX Compilation Module

Turns rendered template source into a PDF with an external LaTeX engine
(pdflatex by default).
"""

import re
import shutil
import subprocess
import tempfile
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from PyPDF2 import PdfReader

from printagent.contexts.rendering.exceptions import RenderError
from printagent.contexts.rendering.logger import (
    log_compilation_result,
    log_compilation_start,
)
from printagent.contexts.rendering.options import RenderOptions

# Intermediate files the engine leaves next to the source
LATEX_ARTIFACTS = (".aux", ".log", ".out", ".toc")

SOURCE_NAME = "document.tex"

# "! Undefined control sequence." style errors
_BANG_ERROR = re.compile(r"^! (.+)$", re.MULTILINE)
# Fatal conditions reported without the leading "!"
_BARE_ERRORS = re.compile(
    r"^.*?((?:File ended while scanning use of|Emergency stop).*)$", re.MULTILINE
)
_WARNINGS = re.compile(
    r"^(?:LaTeX Warning: (.+)|Package \w+ Warning: (.+)|(?:Overfull|Underfull) \\hbox \((.+)\))",
    re.MULTILINE,
)


@dataclass
class CompilationResult:
    """
    Outcome of one compile_latex() call.

    Attributes:
        success: Whether a usable PDF was produced
        pdf_path: Path to generated PDF (None if failed)
        stdout: Engine standard output, all passes joined
        stderr: Engine standard error, all passes joined
        errors: Errors parsed from the engine log
        warnings: Warnings parsed from the engine log
        page_count: Pages in the generated PDF (None if unknown)
    """

    success: bool
    pdf_path: Optional[Path] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None


def page_count(pdf_path: Path) -> Optional[int]:
    """Number of pages in a PDF, or None if it cannot be read."""
    try:
        return len(PdfReader(str(pdf_path)).pages)
    except Exception:
        return None


def _parse_latex_log(log_content: str) -> Tuple[List[str], List[str]]:
    """Extract (errors, warnings) from an engine .log file."""
    errors = [m.strip() for m in _BANG_ERROR.findall(log_content)]
    for message in _BARE_ERRORS.findall(log_content):
        if message not in errors:
            errors.append(message)

    warnings = [
        next(group for group in groups if group).strip()
        for groups in _WARNINGS.findall(log_content)
    ]
    return errors, warnings


def _remove_artifacts(tex_path: Path) -> None:
    for suffix in LATEX_ARTIFACTS:
        tex_path.with_suffix(suffix).unlink(missing_ok=True)


def _run_engine(engine: str, tex_file: Path, timeout: Optional[float]) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            [engine, "-interaction=nonstopmode", "-file-line-error", tex_file.name],
            cwd=tex_file.parent,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise RenderError("Rendering engine could not be launched", engine=engine) from e
    except subprocess.TimeoutExpired as e:
        raise RenderError(f"Rendering engine timed out after {timeout}s", engine=engine) from e


def compile_latex(
    tex_file: Path,
    engine: str = "pdflatex",
    num_passes: int = 1,
    timeout: Optional[float] = None,
    keep_artifacts: bool = False,
) -> CompilationResult:
    """
    Compile a LaTeX file to a PDF next to it.

    Args:
        tex_file: Path to the .tex file to compile
        engine: LaTeX engine executable
        num_passes: Number of engine passes (default: 1)
        timeout: Seconds allowed per pass (None = wait indefinitely)
        keep_artifacts: Keep intermediate files (default: False)

    Returns:
        CompilationResult with success status and diagnostic information

    Raises:
        RenderError: If the engine cannot be launched or exceeds the timeout
    """
    pdf_path = tex_file.with_suffix(".pdf")
    stdout, stderr = [], []
    exit_ok = True

    for _ in range(num_passes):
        run = _run_engine(engine, tex_file, timeout)
        stdout.append(run.stdout)
        stderr.append(run.stderr)
        if run.returncode != 0:
            exit_ok = False
            break

    errors: List[str] = []
    warnings: List[str] = []
    log_file = tex_file.with_suffix(".log")
    if log_file.exists():
        # Engine logs are not guaranteed UTF-8 (font names, input echoes)
        errors, warnings = _parse_latex_log(log_file.read_text(encoding="latin-1"))

    produced = pdf_path.exists()
    if not produced and not errors:
        errors.append("PDF file was not generated")
    # nonstopmode can exit non-zero on recoverable problems; a PDF with a clean log is kept
    success = produced and (exit_ok or not errors)

    if not keep_artifacts:
        _remove_artifacts(tex_file)

    return CompilationResult(
        success=success,
        pdf_path=pdf_path if produced else None,
        stdout="\n".join(stdout),
        stderr="\n".join(stderr),
        errors=errors,
        warnings=warnings,
        page_count=page_count(pdf_path) if produced else None,
    )


class Renderer(ABC):
    """
    Renderer capability: template source in, fixed-layout PDF out.

    Implementations raise RenderError when no usable PDF was produced.
    """

    @abstractmethod
    def render(
        self,
        source: str,
        output_pdf: Path,
        options: RenderOptions,
        engine: Optional[str] = None,
        job_name: str = "document",
    ) -> Path:
        """Materialize `source` as a PDF at `output_pdf` and return that path."""
        raise NotImplementedError


class LatexRenderer(Renderer):
    """
    Renders LaTeX source with an external engine.

    Each call compiles in a private scratch directory next to the output PDF,
    so concurrent jobs never share intermediate files.
    """

    def __init__(
        self,
        engine: str = "pdflatex",
        num_passes: int = 1,
        timeout: Optional[float] = None,
    ) -> None:
        self.engine = engine
        self.num_passes = num_passes
        self.timeout = timeout

    def render(
        self,
        source: str,
        output_pdf: Path,
        options: RenderOptions,
        engine: Optional[str] = None,
        job_name: str = "document",
    ) -> Path:
        engine = engine or self.engine
        output_pdf = Path(output_pdf)
        work_dir = Path(tempfile.mkdtemp(prefix=".__render_", dir=output_pdf.parent))

        try:
            tex_file = work_dir / SOURCE_NAME
            tex_file.write_text(source, encoding="utf-8")

            log_compilation_start(job_name, engine, work_dir)
            start_time = time.time()
            result = compile_latex(
                tex_file, engine=engine, num_passes=self.num_passes, timeout=self.timeout
            )
            log_compilation_result(job_name, result, time.time() - start_time)

            if not result.success or result.pdf_path is None:
                raise RenderError("LaTeX compilation failed", engine=engine, errors=result.errors)

            shutil.move(str(result.pdf_path), str(output_pdf))
        finally:
            shutil.rmtree(work_dir, ignore_errors=True)

        return output_pdf
