"""
Pipeline Context

Responsibilities:
- Runs each job file through parse, validate, render, print and cleanup
- Guarantees the job file is consumed once and unprinted PDFs are kept
- Watches the Job Store and spawns one task per new file

Owns: Job lifecycle, output naming, temp artifact handling, queue watching
Never: Parses templates or talks to the spooler directly
"""

from printagent.contexts.pipeline.bootstrap import build_pipeline, build_watcher, run_agent, start_agent
from printagent.contexts.pipeline.job_pipeline import JobPipeline
from printagent.contexts.pipeline.naming import output_filename, sanitize_identity
from printagent.contexts.pipeline.outcome import ArtifactAction, JobOutcome, OutcomeKind
from printagent.contexts.pipeline.watcher import JobStoreWatcher

__all__ = [
    "ArtifactAction",
    "JobOutcome",
    "JobPipeline",
    "JobStoreWatcher",
    "OutcomeKind",
    "build_pipeline",
    "build_watcher",
    "output_filename",
    "run_agent",
    "sanitize_identity",
    "start_agent",
]
