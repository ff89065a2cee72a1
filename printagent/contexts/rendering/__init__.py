"""
Rendering Context

Responsibilities:
- Compiles rendered template source to PDF
- Applies page layout (named format, or fixed width with content-driven length)
- Reports engine errors and warnings

Owns: LaTeX compilation, PDF materialization at a requested path
Never: Decides whether a document is printed or kept
"""

from printagent.contexts.rendering.compiler import (
    CompilationResult,
    LatexRenderer,
    Renderer,
    compile_latex,
)
from printagent.contexts.rendering.exceptions import RenderError
from printagent.contexts.rendering.options import RenderOptions

__all__ = [
    "CompilationResult",
    "LatexRenderer",
    "RenderError",
    "RenderOptions",
    "Renderer",
    "compile_latex",
]
