"""Shared fixtures and fakes for printagent tests."""

import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pytest

from printagent.contexts.pipeline.job_pipeline import JobPipeline
from printagent.contexts.printing.exceptions import PrinterError
from printagent.contexts.printing.printer_base import OutputSink, PrinterDirectory
from printagent.contexts.printing.printer_registry import PrinterAliasMap
from printagent.contexts.rendering.compiler import Renderer
from printagent.contexts.rendering.exceptions import RenderError
from printagent.contexts.rendering.options import RenderOptions
from printagent.contexts.templating.registries import TemplateRegistry
from printagent.contexts.templating.template_adapter import TemplateRenderingAdapter
from printagent.utils.event_logging import JobEventLog

FIXED_MOMENT = datetime(2024, 5, 1, 14, 3, 22)

TEMPLATE_CONFIG = """\
receipt:
  file: receipt.tex.jinja
  width: 80mm
invoice:
  file: invoice.tex.jinja
  format: A4
ghost:
  file: ghost.tex.jinja
"""

RECEIPT_TEMPLATE = "<<< page.documentclass >>>\nReceipt <<< invoiceNo | tex >>> for <<< customer | tex >>>\n"
INVOICE_TEMPLATE = "<<< page.documentclass >>>\nInvoice <<< invoiceNo | tex >>> total <<< total | money >>>\n"


class FakeRenderer(Renderer):
    """Writes the rendered source into the output path instead of compiling it."""

    def __init__(self, fail: bool = False, leave_partial: bool = False):
        self.fail = fail
        self.leave_partial = leave_partial
        self.calls: List[dict] = []

    def render(self, source, output_pdf, options, engine=None, job_name="document"):
        self.calls.append(
            {"source": source, "output_pdf": Path(output_pdf), "options": options, "engine": engine}
        )
        if self.fail:
            if self.leave_partial:
                Path(output_pdf).write_bytes(b"%PDF-partial")
            raise RenderError("engine exploded", engine=engine or "fake")
        Path(output_pdf).write_text("%PDF-1.4\n" + source, encoding="utf-8")
        return Path(output_pdf)


class FakePrinterDirectory(PrinterDirectory):
    def __init__(self, printers=(), fail: bool = False):
        self.printers = list(printers)
        self.fail = fail
        self.calls = 0

    def list_printers(self):
        self.calls += 1
        if self.fail:
            raise PrinterError("lpstat failed")
        return list(self.printers)


class FakeOutputSink(OutputSink):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.submissions: List[dict] = []

    def print_file(self, file_path, printer: Optional[str] = None, job_name: Optional[str] = None):
        if self.fail:
            raise PrinterError("device error")
        assert Path(file_path).exists(), "sink must receive an existing file"
        self.submissions.append({"file": Path(file_path), "printer": printer, "job_name": job_name})


@pytest.fixture
def templates_dir(tmp_path) -> Path:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "template_config.yaml").write_text(TEMPLATE_CONFIG)
    (templates / "receipt.tex.jinja").write_text(RECEIPT_TEMPLATE)
    (templates / "invoice.tex.jinja").write_text(INVOICE_TEMPLATE)
    return templates


@pytest.fixture
def registry(templates_dir) -> TemplateRegistry:
    return TemplateRegistry.from_config_file(templates_dir / "template_config.yaml", templates_dir)


@pytest.fixture
def queue_dir(tmp_path) -> Path:
    queue = tmp_path / "queue"
    queue.mkdir()
    return queue


@pytest.fixture
def output_dir(tmp_path) -> Path:
    output = tmp_path / "output"
    output.mkdir()
    return output


@pytest.fixture
def event_log(tmp_path) -> JobEventLog:
    return JobEventLog(tmp_path / "logs" / "job_events.log")


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def printer_directory() -> FakePrinterDirectory:
    return FakePrinterDirectory(printers=["TM-T20", "HP_LaserJet"])


@pytest.fixture
def output_sink() -> FakeOutputSink:
    return FakeOutputSink()


@pytest.fixture
def alias_map() -> PrinterAliasMap:
    return PrinterAliasMap({"pos": "TM-T20"})


@pytest.fixture
def make_pipeline(registry, renderer, alias_map, printer_directory, output_sink, output_dir, event_log):
    """Factory for a JobPipeline wired to fakes; keyword arguments replace collaborators."""

    def _make(**overrides) -> JobPipeline:
        parts = {
            "templates": TemplateRenderingAdapter(registry, overrides.pop("renderer", renderer)),
            "alias_map": alias_map,
            "printer_directory": printer_directory,
            "output_sink": output_sink,
            "output_path": output_dir,
            "event_log": event_log,
            "clock": lambda: FIXED_MOMENT,
        }
        parts.update(overrides)
        return JobPipeline(**parts)

    return _make


@pytest.fixture
def drop_job(queue_dir):
    """Write a job file into the queue and return its path."""
    counter = {"n": 0}

    def _drop(record=None, raw: Optional[str] = None, name: Optional[str] = None) -> Path:
        counter["n"] += 1
        path = queue_dir / (name or f"job-{counter['n']}.json")
        path.write_text(raw if raw is not None else json.dumps(record or {}), encoding="utf-8")
        return path

    return _drop


def output_files(output_dir: Path) -> List[Path]:
    """Every file left in the output directory, temp files included."""
    return sorted(p for p in output_dir.iterdir() if p.is_file())
