"""
Templating Context

Responsibilities:
- Loads the template registry (selector -> file + page layout)
- Validates job template selectors
- Renders template source from job payloads

Owns: Template registry, Jinja2 environment, payload-to-source rendering
Never: Runs the rendering engine itself or touches printers
"""

from printagent.contexts.templating.exceptions import (
    TemplateConfigError,
    TemplateRenderError,
    TemplateResourceError,
    UnknownTemplateError,
)
from printagent.contexts.templating.registries import TemplateDescriptor, TemplateRegistry
from printagent.contexts.templating.template_adapter import TemplateRenderingAdapter

__all__ = [
    "TemplateConfigError",
    "TemplateDescriptor",
    "TemplateRegistry",
    "TemplateRenderError",
    "TemplateRenderingAdapter",
    "TemplateResourceError",
    "UnknownTemplateError",
]
