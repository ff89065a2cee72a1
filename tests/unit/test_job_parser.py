"""Unit tests for job descriptor parsing."""

import pytest

from printagent.contexts.intake import (
    DEFAULT_TEMPLATE,
    MalformedJobError,
    parse_job_record,
    parse_job_text,
    read_job_file,
)


@pytest.mark.unit
def test_defaults_applied_to_minimal_job():
    job = parse_job_record({}, clock=lambda: 1.0)

    assert job.template == DEFAULT_TEMPLATE == "receipt"
    assert job.print_requested is True
    assert job.save_artifact is False
    assert job.printer_name is None
    assert job.engine_path is None
    assert job.job_id == "unknown-1000"
    assert job.identity_generated is True


@pytest.mark.unit
def test_control_fields_are_lifted_out_of_payload():
    job = parse_job_record(
        {
            "invoiceNo": "INV-001",
            "template": "invoice",
            "print": False,
            "saveArtifact": True,
            "printerName": "pos",
            "enginePath": "/usr/bin/xelatex",
            "customer": "Ada",
            "items": [{"name": "Tea", "price": 2}],
        }
    )

    assert job.job_id == "INV-001"
    assert job.template == "invoice"
    assert job.print_requested is False
    assert job.save_artifact is True
    assert job.printer_name == "pos"
    assert job.engine_path == "/usr/bin/xelatex"
    assert job.payload == {"customer": "Ada", "items": [{"name": "Tea", "price": 2}]}


@pytest.mark.unit
@pytest.mark.parametrize("value, expected", [(False, False), (True, True), (0, True), ("no", True), (None, True)])
def test_only_literal_false_disables_printing(value, expected):
    assert parse_job_record({"print": value}).print_requested is expected


@pytest.mark.unit
@pytest.mark.parametrize("value, expected", [(True, True), (1, False), ("yes", False), (False, False)])
def test_only_literal_true_enables_saving(value, expected):
    assert parse_job_record({"saveArtifact": value}).save_artifact is expected


@pytest.mark.unit
def test_save_pdf_alias():
    assert parse_job_record({"savePDF": True}).save_artifact is True


@pytest.mark.unit
def test_numeric_identity_is_stringified():
    job = parse_job_record({"invoiceNo": 1042})

    assert job.job_id == "1042"
    assert job.identity_generated is False


@pytest.mark.unit
@pytest.mark.parametrize("identity", ["", "   ", None])
def test_blank_identity_falls_back(identity):
    job = parse_job_record({"invoiceNo": identity}, clock=lambda: 2.0)

    assert job.job_id == "unknown-2000"


@pytest.mark.unit
def test_render_context_merges_computed_fields_over_payload():
    job = parse_job_record({"invoiceNo": "A-1", "customer": "Ada", "generatedAt": "spoofed"})

    context = job.render_context(generatedAt="2024-05-01T14:03:22")

    assert context == {"customer": "Ada", "invoiceNo": "A-1", "generatedAt": "2024-05-01T14:03:22"}


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "{broken",
        "[]",
        '"just a string"',
        '{"template": 42}',
        '{"printerName": ["a"]}',
        '{"invoiceNo": {"nested": true}}',
        '{"invoiceNo": true}',
    ],
)
def test_malformed_jobs_raise(text):
    with pytest.raises(MalformedJobError):
        parse_job_text(text)


@pytest.mark.unit
def test_read_job_file(tmp_path):
    path = tmp_path / "job.json"
    path.write_text('{"invoiceNo": "F-1", "template": "invoice"}', encoding="utf-8")

    job = read_job_file(path)

    assert job.job_id == "F-1"
    assert job.source_file == path


@pytest.mark.unit
def test_read_job_file_accepts_utf8_bom(tmp_path):
    path = tmp_path / "job.json"
    path.write_bytes(b'\xef\xbb\xbf{"invoiceNo": "BOM-1"}')

    assert read_job_file(path).job_id == "BOM-1"


@pytest.mark.unit
def test_read_job_file_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "job.json"
    path.write_bytes(b'{"invoiceNo": "\xff\xfe"}')

    with pytest.raises(MalformedJobError):
        read_job_file(path)
