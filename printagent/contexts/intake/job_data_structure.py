"""
Job descriptor data structure for the Intake context.

A JobDescriptor has a fixed set of known control fields plus an open payload
map holding whatever template-specific data the job carries.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_TEMPLATE = "receipt"

# Job file keys consumed by the pipeline itself; everything else is payload
IDENTITY_KEY = "invoiceNo"
CONTROL_KEYS = frozenset(
    {"template", "print", "saveArtifact", "savePDF", "printerName", "enginePath", IDENTITY_KEY}
)


@dataclass(frozen=True)
class JobDescriptor:
    """
    One unit of work read from the Job Store.

    Attributes:
        job_id: Caller-supplied reference (invoice/document number) or generated fallback
        template: Template selector (defaults to "receipt")
        payload: Template-specific fields passed through to the renderer
        print_requested: Submit to a printer (default True)
        save_artifact: Keep the PDF even when printing succeeds (default False)
        printer_name: Printer alias or physical printer name (None = default printer)
        engine_path: Renderer engine override for this job
        source_file: Job file the descriptor was read from
        identity_generated: True when job_id is a generated fallback
    """

    job_id: str
    template: str = DEFAULT_TEMPLATE
    payload: Dict[str, Any] = field(default_factory=dict)
    print_requested: bool = True
    save_artifact: bool = False
    printer_name: Optional[str] = None
    engine_path: Optional[str] = None
    source_file: Optional[Path] = None
    identity_generated: bool = False

    def render_context(self, **computed_fields: Any) -> Dict[str, Any]:
        """
        Build the data record handed to the template.

        Computed fields (identity, generation timestamps, page options) are
        merged into the payload and take precedence over payload keys of the
        same name.
        """
        return {**self.payload, IDENTITY_KEY: self.job_id, **computed_fields}
