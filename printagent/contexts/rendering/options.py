"""Page layout options passed from a template descriptor to the renderer."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

# LaTeX paper option names for common page formats
PAPER_OPTIONS = {
    "a3": "a3paper",
    "a4": "a4paper",
    "a5": "a5paper",
    "a6": "a6paper",
    "b5": "b5paper",
    "letter": "letterpaper",
    "legal": "legalpaper",
    "executive": "executivepaper",
}


def normalize_width(width: Union[str, int, float, None]) -> Optional[str]:
    """Bare numbers are millimetres: 80 -> "80mm". Strings pass through unchanged."""
    if width is None or width == "":
        return None
    if isinstance(width, bool):
        raise ValueError(f"Page width must be a length, got {width!r}")
    if isinstance(width, (int, float)):
        return f"{width:g}mm"
    return str(width).strip()


@dataclass(frozen=True)
class RenderOptions:
    """
    Page layout for one rendered document.

    Either a named page format (fixed page size) or a page width with no
    height, so that page length follows the content. Height is never set.
    Format wins when both are present.
    """

    format: Optional[str] = None
    width: Optional[str] = None

    def __post_init__(self):
        if self.format and self.width:
            object.__setattr__(self, "width", None)

    @property
    def paper_option(self) -> Optional[str]:
        if not self.format:
            return None
        return PAPER_OPTIONS.get(self.format.lower(), f"{self.format.lower()}paper")

    def documentclass(self) -> str:
        """
        LaTeX class line for this layout.

        A4 -> \\documentclass[a4paper]{article}
        80mm -> \\documentclass[varwidth=80mm,border=2mm]{standalone}
        """
        if self.format:
            return f"\\documentclass[{self.paper_option}]{{article}}"
        if self.width:
            return f"\\documentclass[varwidth={self.width},border=2mm]{{standalone}}"
        return "\\documentclass{article}"

    def as_context(self) -> Dict[str, Any]:
        """Template-facing view of the layout (exposed as `page`)."""
        return {
            "format": self.format,
            "width": self.width,
            "documentclass": self.documentclass(),
        }
