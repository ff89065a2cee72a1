"""
Job Pipeline

Runs one job file through its lifecycle:

    detected -> parsed -> validated -> rendered -> output decided
             -> persisted-or-discarded -> cleaned

Malformed files, unknown templates and missing template files are discarded
without output. Render failures skip printing and saving. Print failures only
mark the job as not printed, which forces the PDF to be kept. Whatever
happens, the job file is deleted at the end and the temporary PDF is either
saved under its final name or removed.
"""

import asyncio
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from printagent.contexts.intake.exceptions import MalformedJobError
from printagent.contexts.intake.job_data_structure import JobDescriptor
from printagent.contexts.intake.job_parser import read_job_file
from printagent.contexts.pipeline.logger import (
    _log_debug,
    _log_error,
    _log_info,
    _log_success,
    _log_warning,
)
from printagent.contexts.pipeline.naming import temp_artifact_path, unique_output_path
from printagent.contexts.pipeline.outcome import ArtifactAction, JobOutcome, OutcomeKind
from printagent.contexts.printing.exceptions import PrinterError
from printagent.contexts.printing.printer_base import OutputSink, PrinterDirectory
from printagent.contexts.printing.printer_registry import PrinterAliasMap
from printagent.contexts.printing.resolution import submit_print
from printagent.contexts.templating.exceptions import TemplateResourceError, UnknownTemplateError
from printagent.contexts.templating.registries import TemplateDescriptor
from printagent.contexts.templating.template_adapter import TemplateRenderingAdapter
from printagent.utils.event_logging import JobEventLog

EVENT_SOURCE = "pipeline"


class JobPipeline:
    """
    Processes job files from the Job Store.

    All collaborators are passed in at construction and treated as read-only
    for the life of the process. process_job() never raises for job-level
    failures; it returns a JobOutcome instead.
    """

    def __init__(
        self,
        templates: TemplateRenderingAdapter,
        alias_map: PrinterAliasMap,
        printer_directory: PrinterDirectory,
        output_sink: OutputSink,
        output_path: Path,
        event_log: JobEventLog,
        clock: Callable[[], datetime] = datetime.now,
        id_clock: Callable[[], float] = time.time,
    ):
        self.templates = templates
        self.alias_map = alias_map
        self.printer_directory = printer_directory
        self.output_sink = output_sink
        self.output_path = Path(output_path)
        self.event_log = event_log
        self.clock = clock
        self.id_clock = id_clock

    # =========================================================================
    # ENTRY POINT
    # =========================================================================

    async def process_job(self, source_file: Path) -> JobOutcome:
        """
        Run one job file to completion.

        Args:
            source_file: Job descriptor file in the Job Store

        Returns:
            JobOutcome describing what happened; the job file is gone afterwards
        """
        source_file = Path(source_file)
        outcome = JobOutcome(source_file=source_file)
        _log_info(f"New job: {source_file.name}")
        await self._record(outcome, "detected")

        try:
            await self._run_stages(outcome)
        finally:
            await self._remove_source(outcome)

        _log_debug(f"Job finished: {outcome.summary()}")
        return outcome

    # =========================================================================
    # STAGES
    # =========================================================================

    async def _run_stages(self, outcome: JobOutcome) -> None:
        job = await self._parse(outcome)
        if job is None:
            return

        descriptor = await self._validate(job, outcome)
        if descriptor is None:
            return

        moment = self.clock()
        temp_pdf = temp_artifact_path(self.output_path)

        rendered = await self._render(job, descriptor, temp_pdf, moment, outcome)
        if not rendered:
            return

        if job.print_requested:
            await self._print(job, temp_pdf, outcome)
        else:
            _log_info(f"{job.job_id}: print skipped (print=false)")
            await self._record(outcome, "print_skipped")

        keep = job.save_artifact or not outcome.printed
        await self._finalize_artifact(job, temp_pdf, moment, keep, outcome)

        if outcome.printed and outcome.saved:
            outcome.kind = OutcomeKind.PRINTED_AND_SAVED
        elif outcome.printed:
            outcome.kind = OutcomeKind.PRINTED
        else:
            outcome.kind = OutcomeKind.SAVED

    async def _parse(self, outcome: JobOutcome) -> Optional[JobDescriptor]:
        try:
            job = await asyncio.to_thread(read_job_file, outcome.source_file, self.id_clock)
        except (MalformedJobError, OSError) as e:
            await self._discard(outcome, OutcomeKind.DISCARDED_MALFORMED, f"Malformed job: {e}")
            return None

        outcome.job_id = job.job_id
        outcome.template = job.template
        await self._record(
            outcome,
            "parsed",
            template=job.template,
            print=job.print_requested,
            save_artifact=job.save_artifact,
            printer_name=job.printer_name,
            identity_generated=job.identity_generated,
        )
        return job

    async def _validate(
        self, job: JobDescriptor, outcome: JobOutcome
    ) -> Optional[TemplateDescriptor]:
        try:
            descriptor = self.templates.resolve(job)
        except UnknownTemplateError as e:
            await self._discard(outcome, OutcomeKind.DISCARDED_UNKNOWN_TEMPLATE, str(e))
            return None

        await self._record(outcome, "validated", template_file=descriptor.file)
        return descriptor

    async def _render(
        self,
        job: JobDescriptor,
        descriptor: TemplateDescriptor,
        temp_pdf: Path,
        moment: datetime,
        outcome: JobOutcome,
    ) -> bool:
        try:
            await asyncio.to_thread(self.templates.render, job, descriptor, temp_pdf, moment)
        except TemplateResourceError as e:
            await self._remove_temp(temp_pdf, outcome)
            await self._discard(outcome, OutcomeKind.DISCARDED_TEMPLATE_MISSING, str(e))
            return False
        except Exception as e:
            # Any template, engine or filesystem failure means no usable document
            await self._remove_temp(temp_pdf, outcome)
            outcome.kind = OutcomeKind.RENDER_FAILED
            outcome.errors.append(f"Render failed: {e}")
            _log_error(f"{job.job_id}: render failed: {e}")
            await self._record(outcome, "render_failed", error=str(e))
            return False

        _log_info(f"{job.job_id}: rendered '{descriptor.name}'")
        await self._record(outcome, "rendered", temp_path=str(temp_pdf))
        return True

    async def _print(self, job: JobDescriptor, temp_pdf: Path, outcome: JobOutcome) -> None:
        try:
            submission = await asyncio.to_thread(
                submit_print,
                temp_pdf,
                job.printer_name,
                self.alias_map,
                self.printer_directory,
                self.output_sink,
                job.job_id,
            )
        except Exception as e:
            # Printing is never fatal: the job counts as not printed and the PDF is kept
            outcome.errors.append(f"Print failed: {e}")
            if isinstance(e, (PrinterError, OSError)):
                _log_warning(f"{job.job_id}: print failed: {e}")
            else:
                _log_error(f"{job.job_id}: print failed unexpectedly: {e!r}")
            await self._record(outcome, "print_failed", printer_name=job.printer_name, error=str(e))
            return

        outcome.printed = True
        outcome.printer = submission.printer
        await self._record(outcome, "printed", printer=submission.printer or "default")

    async def _finalize_artifact(
        self,
        job: JobDescriptor,
        temp_pdf: Path,
        moment: datetime,
        keep: bool,
        outcome: JobOutcome,
    ) -> None:
        if not keep:
            if await self._remove_temp(temp_pdf, outcome):
                outcome.artifact_action = ArtifactAction.REMOVED
                _log_debug(f"{job.job_id}: temp PDF removed")
                await self._record(outcome, "artifact_removed")
            return

        # No await between choosing the free name and the rename, so no other
        # job on the loop can claim the same name in between
        final_pdf = unique_output_path(self.output_path, job.job_id, moment)
        try:
            temp_pdf.rename(final_pdf)
        except OSError as e:
            outcome.errors.append(f"Could not save PDF: {e}")
            _log_error(f"{job.job_id}: could not move {temp_pdf.name} to {final_pdf.name}: {e}")
            await self._record(outcome, "save_failed", error=str(e))
            await self._remove_temp(temp_pdf, outcome)
            return

        outcome.artifact_action = ArtifactAction.SAVED
        outcome.artifact_path = final_pdf
        _log_success(f"{job.job_id}: PDF saved: {final_pdf}")
        await self._record(outcome, "saved", artifact_path=str(final_pdf))

    async def _remove_source(self, outcome: JobOutcome) -> None:
        try:
            await asyncio.to_thread(outcome.source_file.unlink)
        except FileNotFoundError:
            _log_warning(f"Job file already gone: {outcome.source_file}")
            await self._record(outcome, "source_missing")
            return
        except OSError as e:
            outcome.errors.append(f"Could not remove job file: {e}")
            _log_error(f"Could not remove job file {outcome.source_file}: {e}")
            await self._record(outcome, "cleanup_failed", error=str(e))
            return

        outcome.source_removed = True
        _log_info(f"Job cleaned: {outcome.source_file.name}")
        await self._record(outcome, "cleaned", result=outcome.kind.value if outcome.kind else None)

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _discard(self, outcome: JobOutcome, kind: OutcomeKind, message: str) -> None:
        outcome.kind = kind
        outcome.errors.append(message)
        _log_error(f"{outcome.job_id or outcome.source_file.name}: {message}")
        await self._record(outcome, "discarded", reason=kind.value, error=message)

    async def _remove_temp(self, temp_pdf: Path, outcome: JobOutcome) -> bool:
        """Delete a temporary PDF if present. Returns False only when deletion failed."""
        try:
            temp_pdf.unlink(missing_ok=True)
        except OSError as e:
            outcome.errors.append(f"Could not remove temp PDF: {e}")
            _log_error(f"Could not remove temp PDF {temp_pdf}: {e}")
            await self._record(outcome, "temp_cleanup_failed", error=str(e))
            return False
        return True

    async def _record(self, outcome: JobOutcome, event_type: str, **fields) -> None:
        """Append a job event from a worker thread so file IO never blocks the loop."""
        try:
            await asyncio.to_thread(
                self.event_log.log,
                event_type,
                job_id=outcome.job_id,
                source_file=str(outcome.source_file),
                source=EVENT_SOURCE,
                **fields,
            )
        except OSError as e:
            _log_error(f"Could not write job event '{event_type}': {e}")
