"""
Job descriptor parsing.

Job files are UTF-8 JSON objects. Known control fields are validated and
lifted into a JobDescriptor; every other field becomes template payload.
"""

import json
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from printagent.contexts.intake.exceptions import MalformedJobError
from printagent.contexts.intake.job_data_structure import (
    CONTROL_KEYS,
    DEFAULT_TEMPLATE,
    IDENTITY_KEY,
    JobDescriptor,
)
from printagent.contexts.intake.logger import _log_debug


def generate_job_id(clock: Callable[[], float] = time.time) -> str:
    """Fallback identity for jobs that carry no invoice number: unknown-<epoch millis>."""
    return f"unknown-{int(clock() * 1000)}"


def _optional_string(record: Dict[str, Any], key: str, source_file: Optional[Path]) -> Optional[str]:
    value = record.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise MalformedJobError(
            f"Field '{key}' must be a string, got {type(value).__name__}", source_file
        )
    return value


def parse_job_record(
    record: Any,
    source_file: Optional[Path] = None,
    clock: Callable[[], float] = time.time,
) -> JobDescriptor:
    """
    Convert a decoded job record into a JobDescriptor.

    Defaults:
        template     -> "receipt"
        invoiceNo    -> unknown-<epoch millis>
        print        -> True (only a literal false disables printing)
        saveArtifact -> False (only a literal true enables it; savePDF is accepted too)

    Raises:
        MalformedJobError: If the record is not an object or a control field has the wrong type
    """
    if not isinstance(record, dict):
        raise MalformedJobError(
            f"Job must be a JSON object, got {type(record).__name__}", source_file
        )

    template = _optional_string(record, "template", source_file) or DEFAULT_TEMPLATE

    raw_identity = record.get(IDENTITY_KEY)
    if isinstance(raw_identity, bool) or not isinstance(raw_identity, (str, int, float, type(None))):
        raise MalformedJobError(
            f"Field '{IDENTITY_KEY}' must be a string or number, got {type(raw_identity).__name__}",
            source_file,
        )
    identity = str(raw_identity).strip() if raw_identity is not None else ""
    identity_generated = not identity
    if identity_generated:
        identity = generate_job_id(clock)

    payload = {key: value for key, value in record.items() if key not in CONTROL_KEYS}

    return JobDescriptor(
        job_id=identity,
        template=template,
        payload=payload,
        print_requested=record.get("print") is not False,
        save_artifact=record.get("saveArtifact") is True or record.get("savePDF") is True,
        printer_name=_optional_string(record, "printerName", source_file),
        engine_path=_optional_string(record, "enginePath", source_file),
        source_file=source_file,
        identity_generated=identity_generated,
    )


def parse_job_text(
    text: str,
    source_file: Optional[Path] = None,
    clock: Callable[[], float] = time.time,
) -> JobDescriptor:
    """
    Decode job file contents.

    Raises:
        MalformedJobError: If the text is not valid JSON or not a valid job record
    """
    try:
        record = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedJobError("Job file is not valid JSON", source_file, e) from e

    return parse_job_record(record, source_file=source_file, clock=clock)


def read_job_file(path: Path, clock: Callable[[], float] = time.time) -> JobDescriptor:
    """
    Read and parse a job file from the Job Store.

    Raises:
        MalformedJobError: If the file cannot be read as UTF-8 or does not parse
    """
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise MalformedJobError("Job file is not valid UTF-8", path, e) from e

    job = parse_job_text(text, source_file=path, clock=clock)
    _log_debug(f"Parsed {path.name}: job_id={job.job_id} template={job.template}")
    return job
