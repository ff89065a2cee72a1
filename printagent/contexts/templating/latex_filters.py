"""Jinja2 filters for placing job payload values into LaTeX source."""

import re
from typing import Any

from jinja2 import Undefined

LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

_SPECIAL_CHAR_PATTERN = re.compile("|".join(re.escape(char) for char in LATEX_SPECIAL_CHARS))


def escape_latex(value: Any) -> str:
    """
    Escape LaTeX special characters in a payload value.

    Example:
        escape_latex("50% off & more") -> "50\\% off \\& more"
    """
    if value is None or isinstance(value, Undefined):
        return ""
    return _SPECIAL_CHAR_PATTERN.sub(lambda m: LATEX_SPECIAL_CHARS[m.group(0)], str(value))


def format_money(value: Any, places: int = 2) -> str:
    """Format a number with fixed decimals; non-numeric values are escaped as-is."""
    if value is None or isinstance(value, Undefined):
        return ""
    try:
        return f"{float(value):,.{places}f}"
    except (TypeError, ValueError):
        return escape_latex(value)
