"""Per-job result of a pipeline run."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class OutcomeKind(str, Enum):
    PRINTED = "printed"
    SAVED = "saved"
    PRINTED_AND_SAVED = "printed_and_saved"
    DISCARDED_MALFORMED = "discarded_malformed"
    DISCARDED_UNKNOWN_TEMPLATE = "discarded_unknown_template"
    DISCARDED_TEMPLATE_MISSING = "discarded_template_missing"
    RENDER_FAILED = "render_failed"

    @property
    def discarded(self) -> bool:
        return self.name.startswith("DISCARDED_")


class ArtifactAction(str, Enum):
    """What happened to the temporary PDF at the end of a job."""

    NONE = "none"
    SAVED = "saved"
    REMOVED = "removed"


@dataclass
class JobOutcome:
    """
    Result of processing one job file.

    Attributes:
        source_file: Job file that was processed
        kind: Terminal classification of the job
        job_id: Job identity (None if the file never parsed)
        template: Template selector (None if the file never parsed)
        printed: True only if the output sink accepted the document
        printer: Physical printer used (None for the default printer or no print)
        artifact_action: Whether the rendered PDF was saved, removed, or never produced
        artifact_path: Final PDF path when saved
        source_removed: Whether this run deleted the job file
        errors: Error messages collected along the way, in order
    """

    source_file: Path
    kind: Optional[OutcomeKind] = None
    job_id: Optional[str] = None
    template: Optional[str] = None
    printed: bool = False
    printer: Optional[str] = None
    artifact_action: ArtifactAction = ArtifactAction.NONE
    artifact_path: Optional[Path] = None
    source_removed: bool = False
    errors: List[str] = field(default_factory=list)

    @property
    def saved(self) -> bool:
        return self.artifact_action is ArtifactAction.SAVED

    def summary(self) -> str:
        parts = [f"{self.job_id or self.source_file.name}: {self.kind.value if self.kind else 'pending'}"]
        if self.artifact_path:
            parts.append(f"artifact={self.artifact_path}")
        if self.errors:
            parts.append(f"errors={len(self.errors)}")
        return " ".join(parts)
