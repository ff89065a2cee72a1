"""
Printer Alias Map

Optional static mapping from logical printer names used in jobs ("pos",
"kitchen") to physical printer names known to the spooler.
"""

from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from yaml import YAMLError

from printagent.utils.config import ConfigurationError


class PrinterAliasMap(Mapping[str, str]):
    """Read-only alias -> physical printer mapping. Empty targets count as unmapped."""

    def __init__(self, aliases: Optional[Mapping[str, str]] = None):
        self._aliases: Dict[str, str] = {
            str(alias): str(target)
            for alias, target in (aliases or {}).items()
            if target not in (None, "")
        }

    @classmethod
    def from_file(cls, path: Path) -> "PrinterAliasMap":
        """
        Load aliases from a YAML (or JSON) file. A missing file yields an empty map.

        Raises:
            ConfigurationError: If the file exists but is not a flat mapping
        """
        path = Path(path)
        if not path.exists():
            return cls()

        try:
            raw = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
        except (OmegaConfBaseException, YAMLError) as e:
            raise ConfigurationError(f"Printer alias file is not valid YAML: {path}\n{e}") from e

        if raw is None:
            return cls()
        if not isinstance(raw, dict) or any(isinstance(v, (dict, list)) for v in raw.values()):
            raise ConfigurationError(f"Printer alias file must be a flat mapping: {path}")

        return cls(raw)

    def resolve(self, alias: str) -> str:
        """Physical printer name for an alias; unmapped aliases are used literally."""
        return self._aliases.get(alias, alias)

    def __getitem__(self, alias: str) -> str:
        return self._aliases[alias]

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def __len__(self) -> int:
        return len(self._aliases)

    def __repr__(self) -> str:
        return f"PrinterAliasMap({self._aliases!r})"
