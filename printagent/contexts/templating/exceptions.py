"""Custom exceptions for templating context with template references."""

from pathlib import Path
from typing import Iterable, Optional


class TemplateConfigError(Exception):
    """Raised when the template registry file is missing or malformed."""


class UnknownTemplateError(KeyError):
    """
    Raised when a job names a template selector that is not registered.

    Attributes:
        template_name: The selector requested by the job
        known_templates: Selectors present in the registry
    """

    def __init__(self, template_name: str, known_templates: Iterable[str] = ()):
        self.template_name = template_name
        self.known_templates = sorted(known_templates)
        super().__init__(template_name)

    def __str__(self) -> str:
        known = ", ".join(self.known_templates) or "none"
        return f"Unknown template: {self.template_name} (registered: {known})"


class TemplateResourceError(Exception):
    """
    Raised when a registered template's file cannot be loaded.

    Attributes:
        message: Error description
        template_name: Name of the template selector
        template_path: Path to the template file
        original_error: The original loading error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.template_path = template_path
        self.original_error = original_error

        parts = [message]

        if template_name and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Selector: {template_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class TemplateRenderError(Exception):
    """
    Exception raised when template rendering fails.

    Attributes:
        message: Error description
        template_name: Name of the template being rendered
        template_path: Path to the template file
        original_error: The error raised while rendering
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.template_path = template_path
        self.original_error = original_error

        parts = [message]

        if template_name and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Selector: {template_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
