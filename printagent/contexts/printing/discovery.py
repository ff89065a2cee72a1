"""
Printer alias map generation.

Builds a starter alias map from the printers currently installed: each
well-known alias is mapped to the first printer whose name contains its
keyword (case-insensitive), or to "" when none matches.
"""

from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

from omegaconf import OmegaConf

# alias -> keyword searched for in printer names
DEFAULT_ALIAS_KEYWORDS = {
    "pos": "tm",
    "office": "hp",
    "kitchen": "epson",
}


def build_alias_map(
    printers: Iterable[str], keywords: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """
    Map aliases to detected printer names.

    Example:
        build_alias_map(["EPSON_TM-T20", "HP_LaserJet"])
        # {"pos": "EPSON_TM-T20", "office": "HP_LaserJet", "kitchen": "EPSON_TM-T20"}
    """
    printers = list(printers)
    keywords = DEFAULT_ALIAS_KEYWORDS if keywords is None else keywords

    return {
        alias: next((name for name in printers if keyword.lower() in name.lower()), "")
        for alias, keyword in keywords.items()
    }


def write_alias_map(aliases: Mapping[str, str], path: Path) -> Path:
    """Write an alias map as YAML and return its path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(OmegaConf.create(dict(aliases)), path)
    return path
