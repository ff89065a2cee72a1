"""
Integration tests for rendering - compiles the bundled templates with real pdflatex.
"""

import shutil
from datetime import datetime
from pathlib import Path

import pytest

from printagent.contexts.intake.job_parser import parse_job_record
from printagent.contexts.rendering import LatexRenderer, RenderError, RenderOptions
from printagent.contexts.rendering.compiler import page_count
from printagent.contexts.templating import TemplateRegistry, TemplateRenderingAdapter

BUNDLED_TEMPLATES = Path(__file__).resolve().parents[2] / "templates"

PDFLATEX_AVAILABLE = shutil.which("pdflatex") is not None
skip_if_no_pdflatex = pytest.mark.skipif(
    not PDFLATEX_AVAILABLE,
    reason="pdflatex not installed - install TeX Live, MiKTeX, or MacTeX"
)

RECEIPT_JOB = {
    "template": "receipt",
    "invoiceNo": "R-1001",
    "storeName": "Corner Café & Bakery",
    "customer": "Jane_Doe",
    "items": [
        {"name": "Espresso", "qty": 2, "price": 2.5},
        {"name": "Croissant #1", "price": 3},
    ],
    "total": 8,
}

INVOICE_JOB = {
    "template": "invoice",
    "invoiceNo": "INV-2024/05",
    "companyName": "ACME 100% Ltd.",
    "billTo": "Wile E. Coyote",
    "items": [{"name": "Rocket skates", "qty": 1, "price": 199.99}],
    "total": 199.99,
}


@pytest.fixture
def adapter() -> TemplateRenderingAdapter:
    registry = TemplateRegistry.from_config_file(
        BUNDLED_TEMPLATES / "template_config.yaml", BUNDLED_TEMPLATES
    )
    return TemplateRenderingAdapter(registry, LatexRenderer(timeout=120))


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_pdflatex
@pytest.mark.parametrize("record", [RECEIPT_JOB, INVOICE_JOB], ids=["receipt", "invoice"])
def test_bundled_template_renders(adapter, record, tmp_path):
    job = parse_job_record(record, tmp_path / "job.json")
    descriptor = adapter.resolve(job)

    pdf = adapter.render(job, descriptor, tmp_path / "out.pdf", datetime(2024, 5, 1, 14, 3, 22))

    assert pdf.exists()
    assert pdf.stat().st_size > 0
    assert page_count(pdf) == 1
    # Only the PDF remains; the scratch directory is gone
    assert sorted(p.name for p in tmp_path.iterdir()) == ["out.pdf"]


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_pdflatex
def test_broken_source_raises_render_error(tmp_path):
    renderer = LatexRenderer(timeout=120)
    broken = "\\documentclass{article}\n\\begin{document}\n\\undefinedcommand\n\\end{document}\n"

    with pytest.raises(RenderError) as exc_info:
        renderer.render(broken, tmp_path / "out.pdf", RenderOptions())

    assert exc_info.value.errors
    assert not (tmp_path / "out.pdf").exists()
