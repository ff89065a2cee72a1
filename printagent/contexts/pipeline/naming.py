"""
Output and temporary file naming.

Final documents are named <sanitized-identity>-<YYYY-MM-DD>-<HH-MM-SS>.<ext>.
Temporary PDFs get a per-job random token so concurrent jobs never collide.
"""

import re
import secrets
import uuid
from datetime import datetime
from pathlib import Path

from printagent.utils.timestamp import path_safe_time

DOCUMENT_EXTENSION = "pdf"
TEMP_PREFIX = ".__temp_"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_identity(identity: str) -> str:
    """Replace every character outside [A-Za-z0-9_-] with an underscore."""
    return _UNSAFE_CHARS.sub("_", identity)


def output_filename(identity: str, moment: datetime, extension: str = DOCUMENT_EXTENSION) -> str:
    """
    Deterministic output name for a job.

    Example:
        output_filename("INV-001", datetime(2024, 5, 1, 14, 3, 22))
        # "INV-001-2024-05-01-14-03-22.pdf"
    """
    return f"{sanitize_identity(identity)}-{moment.strftime('%Y-%m-%d')}-{path_safe_time(moment)}.{extension}"


def unique_output_path(
    output_dir: Path, identity: str, moment: datetime, extension: str = DOCUMENT_EXTENSION
) -> Path:
    """
    Final path for a job's document, never an existing file.

    When the deterministic name is taken (same identity in the same second)
    a short random suffix is appended: INV-001-2024-05-01-14-03-22-3fa9c1.pdf
    """
    base = Path(output_dir) / output_filename(identity, moment, extension)
    candidate = base
    while candidate.exists():
        candidate = base.with_name(f"{base.stem}-{secrets.token_hex(3)}.{extension}")
    return candidate


def temp_artifact_path(output_dir: Path, extension: str = DOCUMENT_EXTENSION) -> Path:
    """Unique hidden temporary path for a job's rendered document."""
    return Path(output_dir) / f"{TEMP_PREFIX}{uuid.uuid4().hex}.{extension}"


def is_temp_artifact(path: Path) -> bool:
    return Path(path).name.startswith(TEMP_PREFIX)
