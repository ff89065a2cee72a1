"""
Template Registry

Static mapping from template selector to template file and page layout,
loaded once at startup from template_config.yaml.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, TemplateSyntaxError
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from yaml import YAMLError

from printagent.contexts.rendering.options import RenderOptions, normalize_width
from printagent.contexts.templating.exceptions import (
    TemplateConfigError,
    TemplateResourceError,
    UnknownTemplateError,
)
from printagent.contexts.templating.latex_filters import escape_latex, format_money


@dataclass(frozen=True)
class TemplateDescriptor:
    """
    Registry entry for one template selector.

    Attributes:
        name: Template selector used by jobs
        file: Template file, relative to the templates directory
        format: Named page format (e.g., "A4")
        width: Page width (e.g., "80mm"); height is always left to the content
    """

    name: str
    file: str
    format: Optional[str] = None
    width: Optional[str] = None

    def render_options(self) -> RenderOptions:
        """Page layout for this template; format takes precedence over width."""
        if self.format:
            return RenderOptions(format=self.format)
        return RenderOptions(width=self.width)

    @classmethod
    def from_config(cls, name: str, entry: Any) -> "TemplateDescriptor":
        if not isinstance(entry, Mapping):
            raise TemplateConfigError(f"Template '{name}' must be a mapping, got: {entry!r}")
        file = entry.get("file")
        if not isinstance(file, str) or not file:
            raise TemplateConfigError(f"Template '{name}' has no 'file' entry")
        try:
            width = normalize_width(entry.get("width"))
        except ValueError as e:
            raise TemplateConfigError(f"Template '{name}': {e}") from e
        return cls(name=name, file=file, format=entry.get("format") or None, width=width)


def build_environment(templates_path: Path) -> Environment:
    """
    Jinja2 environment for LaTeX templates.

    Uses custom delimiters to avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>

    Missing payload fields render as empty strings.
    """
    env = Environment(
        loader=FileSystemLoader(str(templates_path)),
        variable_start_string="<<<",
        variable_end_string=">>>",
        block_start_string="<%%",
        block_end_string="%%>",
        comment_start_string="<#",
        comment_end_string="#>",
        # Preserve whitespace (important for LaTeX)
        trim_blocks=False,
        lstrip_blocks=False,
        keep_trailing_newline=True,
        auto_reload=True,
    )
    env.filters["tex"] = escape_latex
    env.filters["money"] = format_money
    return env


class TemplateRegistry:
    """
    Registry of template descriptors and their Jinja2 templates.

    Descriptors are fixed at construction. Template files are read through the
    Jinja2 environment, which reloads a file when it changes on disk and fails
    when it disappears.
    """

    def __init__(self, templates_path: Path, descriptors: Mapping[str, TemplateDescriptor]):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding the template files
            descriptors: Template selector -> descriptor
        """
        self.templates_path = Path(templates_path)
        self._descriptors: Dict[str, TemplateDescriptor] = dict(descriptors)
        self.env = build_environment(self.templates_path)

    @classmethod
    def from_config_file(cls, config_path: Path, templates_path: Path) -> "TemplateRegistry":
        """
        Load the registry from a YAML (or JSON) file.

        Example template_config.yaml:
            receipt:
              file: receipt.tex.jinja
              width: 80mm
            invoice:
              file: invoice.tex.jinja
              format: A4

        Raises:
            TemplateConfigError: If the file is missing or malformed
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise TemplateConfigError(f"Template config not found: {config_path}")

        try:
            raw = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
        except (OmegaConfBaseException, YAMLError) as e:
            raise TemplateConfigError(f"Template config is not valid YAML: {config_path}\n{e}") from e

        if not isinstance(raw, dict):
            raise TemplateConfigError(f"Template config must be a mapping: {config_path}")

        descriptors = {
            str(name): TemplateDescriptor.from_config(str(name), entry)
            for name, entry in raw.items()
        }
        return cls(templates_path, descriptors)

    def names(self) -> List[str]:
        """Registered template selectors, sorted."""
        return sorted(self._descriptors)

    def has_template(self, name: str) -> bool:
        return name in self._descriptors

    def get_descriptor(self, name: str) -> TemplateDescriptor:
        """
        Look up a template selector.

        Raises:
            UnknownTemplateError: If the selector is not registered
        """
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownTemplateError(name, self._descriptors) from None

    def get_template_path(self, name: str) -> Path:
        """Get the file path for a template selector."""
        return self.templates_path / self.get_descriptor(name).file

    def load_template(self, name: str) -> Template:
        """
        Load the Jinja2 template for a selector.

        Raises:
            UnknownTemplateError: If the selector is not registered
            TemplateResourceError: If the file is missing, unreadable or not a valid template
        """
        descriptor = self.get_descriptor(name)
        template_path = self.templates_path / descriptor.file

        try:
            return self.env.get_template(descriptor.file)
        except TemplateNotFound as e:
            raise TemplateResourceError(
                "Template file not found", name, template_path, e
            ) from e
        except TemplateSyntaxError as e:
            raise TemplateResourceError(
                "Template file has a syntax error", name, template_path, e
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateResourceError(
                "Template file could not be read", name, template_path, e
            ) from e
