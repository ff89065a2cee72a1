"""
Template Rendering Adapter

Connects a job to the renderer: looks up the job's template descriptor,
renders the template with the job payload, and hands the source to the
Renderer with the template's page layout.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from printagent.contexts.intake.job_data_structure import JobDescriptor
from printagent.contexts.rendering.compiler import Renderer
from printagent.contexts.rendering.options import RenderOptions
from printagent.contexts.templating.exceptions import TemplateRenderError
from printagent.contexts.templating.logger import _log_debug
from printagent.contexts.templating.registries import TemplateDescriptor, TemplateRegistry


def computed_fields(generated_at: datetime, options: RenderOptions) -> Dict[str, Any]:
    """Fields derived at render time and merged into the template data."""
    return {
        "generatedAt": generated_at.isoformat(timespec="seconds"),
        "generatedDate": generated_at.strftime("%Y-%m-%d"),
        "generatedTime": generated_at.strftime("%H:%M:%S"),
        "page": options.as_context(),
    }


class TemplateRenderingAdapter:
    """Template lookup and rendering on top of a TemplateRegistry and a Renderer."""

    def __init__(self, registry: TemplateRegistry, renderer: Renderer):
        self.registry = registry
        self.renderer = renderer

    def resolve(self, job: JobDescriptor) -> TemplateDescriptor:
        """
        Validate the job's template selector.

        Raises:
            UnknownTemplateError: If the selector is not registered
        """
        return self.registry.get_descriptor(job.template)

    def render_source(
        self, job: JobDescriptor, descriptor: TemplateDescriptor, generated_at: datetime
    ) -> str:
        """
        Render the template source for a job.

        Raises:
            TemplateResourceError: If the template file cannot be loaded
            TemplateRenderError: If the template fails while rendering the payload
        """
        template = self.registry.load_template(descriptor.name)
        options = descriptor.render_options()
        context = job.render_context(**computed_fields(generated_at, options))

        try:
            return template.render(context)
        except Exception as e:
            # Payload-driven failures (e.g. iterating a number) surface as plain Python errors
            raise TemplateRenderError(
                "Template rendering failed",
                descriptor.name,
                self.registry.templates_path / descriptor.file,
                e,
            ) from e

    def render(
        self,
        job: JobDescriptor,
        descriptor: TemplateDescriptor,
        output_pdf: Path,
        generated_at: datetime,
    ) -> Path:
        """
        Render a job into a PDF at output_pdf.

        Raises:
            TemplateResourceError: If the template file cannot be loaded
            TemplateRenderError: If the template fails while rendering the payload
            RenderError: If the engine does not produce a PDF
        """
        source = self.render_source(job, descriptor, generated_at)
        options = descriptor.render_options()
        _log_debug(
            f"{job.job_id}: rendering '{descriptor.name}' "
            f"(format={options.format}, width={options.width})"
        )
        return self.renderer.render(
            source, output_pdf, options, engine=job.engine_path, job_name=job.job_id
        )
