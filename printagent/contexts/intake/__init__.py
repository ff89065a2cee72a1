"""
Intake Context

Responsibilities:
- Reads job descriptor files dropped into the Job Store
- Validates control fields and applies their defaults
- Assigns a fallback identity to jobs without an invoice number

Owns: Job descriptor data model, job file decoding
Never: Touches templates, printers or the filesystem beyond reading the job file
"""

from printagent.contexts.intake.exceptions import MalformedJobError
from printagent.contexts.intake.job_data_structure import DEFAULT_TEMPLATE, JobDescriptor
from printagent.contexts.intake.job_parser import (
    generate_job_id,
    parse_job_record,
    parse_job_text,
    read_job_file,
)

__all__ = [
    "DEFAULT_TEMPLATE",
    "JobDescriptor",
    "MalformedJobError",
    "generate_job_id",
    "parse_job_record",
    "parse_job_text",
    "read_job_file",
]
