"""Unit tests for TemplateRegistry and the rendering adapter."""

from datetime import datetime

import pytest

from conftest import FakeRenderer
from printagent.contexts.intake import parse_job_record
from printagent.contexts.templating import (
    TemplateConfigError,
    TemplateDescriptor,
    TemplateRegistry,
    TemplateRenderingAdapter,
    TemplateResourceError,
    UnknownTemplateError,
)
from printagent.contexts.templating.latex_filters import escape_latex, format_money


@pytest.mark.unit
def test_registry_loads_descriptors(registry):
    assert registry.names() == ["ghost", "invoice", "receipt"]

    receipt = registry.get_descriptor("receipt")
    assert receipt == TemplateDescriptor(name="receipt", file="receipt.tex.jinja", width="80mm")
    assert registry.get_descriptor("invoice").format == "A4"


@pytest.mark.unit
def test_unknown_selector(registry):
    with pytest.raises(UnknownTemplateError) as exc_info:
        registry.get_descriptor("nonexistent")

    assert exc_info.value.template_name == "nonexistent"
    assert "Unknown template: nonexistent" in str(exc_info.value)


@pytest.mark.unit
def test_missing_template_file(registry):
    with pytest.raises(TemplateResourceError) as exc_info:
        registry.load_template("ghost")

    assert exc_info.value.template_name == "ghost"


@pytest.mark.unit
def test_template_syntax_error_is_a_resource_error(registry, templates_dir):
    (templates_dir / "receipt.tex.jinja").write_text("<%% if %%>")

    with pytest.raises(TemplateResourceError):
        registry.load_template("receipt")


@pytest.mark.unit
def test_template_deleted_after_first_load_fails(registry, templates_dir):
    registry.load_template("receipt")
    (templates_dir / "receipt.tex.jinja").unlink()

    with pytest.raises(TemplateResourceError):
        registry.load_template("receipt")


@pytest.mark.unit
def test_format_wins_over_width():
    descriptor = TemplateDescriptor.from_config("both", {"file": "x", "format": "A4", "width": "80mm"})

    options = descriptor.render_options()
    assert options.format == "A4"
    assert options.width is None


@pytest.mark.unit
def test_numeric_width_is_millimetres():
    descriptor = TemplateDescriptor.from_config("narrow", {"file": "x", "width": 58})

    assert descriptor.width == "58mm"


@pytest.mark.unit
@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "receipt: plain-string\n",
        "receipt:\n  width: 80mm\n",
        "receipt: [unclosed\n",
    ],
)
def test_malformed_config(tmp_path, content):
    config = tmp_path / "template_config.yaml"
    config.write_text(content)

    with pytest.raises(TemplateConfigError):
        TemplateRegistry.from_config_file(config, tmp_path)


@pytest.mark.unit
def test_missing_config(tmp_path):
    with pytest.raises(TemplateConfigError):
        TemplateRegistry.from_config_file(tmp_path / "nope.yaml", tmp_path)


@pytest.mark.unit
def test_json_config_is_accepted(tmp_path):
    config = tmp_path / "template-config.json"
    config.write_text('{"receipt": {"file": "receipt.html", "width": "80mm"}}')

    registry = TemplateRegistry.from_config_file(config, tmp_path)

    assert registry.get_descriptor("receipt").file == "receipt.html"


@pytest.mark.unit
def test_missing_payload_fields_render_empty(registry):
    adapter = TemplateRenderingAdapter(registry, FakeRenderer())
    job = parse_job_record({"invoiceNo": "N-1"})

    source = adapter.render_source(job, registry.get_descriptor("receipt"), datetime(2024, 5, 1))

    assert "Receipt N-1 for \n" in source


@pytest.mark.unit
def test_escape_latex():
    assert escape_latex("50% off & $5 #1 a_b {x} ~ ^") == (
        r"50\% off \& \$5 \#1 a\_b \{x\} \textasciitilde{} \textasciicircum{}"
    )
    assert escape_latex("C:\\path") == r"C:\textbackslash{}path"
    assert escape_latex(None) == ""


@pytest.mark.unit
def test_format_money():
    assert format_money(1234.5) == "1,234.50"
    assert format_money("7") == "7.00"
    assert format_money("n/a") == "n/a"
    assert format_money(None) == ""
