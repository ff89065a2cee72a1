"""
Agent configuration.

All settings come from environment variables (a .env file in the working
directory is loaded first). They are read once, at startup, into an
immutable AgentConfig that is handed to the pipeline.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_TEMPLATE_CONFIG_NAME = "template_config.yaml"


class ConfigurationError(Exception):
    """Raised when the agent cannot start because its configuration is unusable."""


def _optional_float(value: Optional[str], name: str) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    try:
        parsed = float(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number of seconds, got: {value!r}") from e
    return parsed if parsed > 0 else None


def _non_negative_int(value: Optional[str], name: str) -> int:
    if value is None or value.strip() == "":
        return 0
    try:
        parsed = int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got: {value!r}") from e
    if parsed < 0:
        raise ConfigurationError(f"{name} must be >= 0, got: {parsed}")
    return parsed


@dataclass(frozen=True)
class AgentConfig:
    """
    Paths and tool settings for one agent process.

    Attributes:
        queue_path: Job Store directory (one file per pending job)
        output_path: Directory where finalized PDFs land
        templates_path: Directory holding template files
        template_config_path: Template Registry file (YAML)
        printers_file: Printer Alias Map file (YAML, optional)
        logs_path: Directory for loguru output and the job event log
        latex_compiler: Default renderer engine executable
        lp_path: CUPS submission command
        lpstat_path: CUPS printer listing command
        render_timeout_s: Seconds before an engine run is killed (None = no bound)
        max_concurrent_jobs: Cap on in-flight jobs (0 = unbounded)
    """

    queue_path: Path
    output_path: Path
    templates_path: Path
    template_config_path: Path
    printers_file: Path
    logs_path: Path
    latex_compiler: str = "pdflatex"
    lp_path: str = "lp"
    lpstat_path: str = "lpstat"
    render_timeout_s: Optional[float] = None
    max_concurrent_jobs: int = 0

    @property
    def events_file(self) -> Path:
        return self.logs_path / "job_events.log"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AgentConfig":
        """
        Build the configuration from environment variables.

        Relative paths are resolved against PRINTAGENT_ROOT (default: the
        current working directory).

        Args:
            environ: Mapping to read instead of os.environ (after loading .env)

        Returns:
            AgentConfig

        Raises:
            ConfigurationError: If a numeric setting cannot be parsed
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        root = Path(environ.get("PRINTAGENT_ROOT") or Path.cwd())

        def path_setting(name: str, default: str) -> Path:
            path = Path(environ.get(name) or default)
            return path if path.is_absolute() else root / path

        templates_path = path_setting("PRINTAGENT_TEMPLATES_PATH", "templates")
        template_config = environ.get("PRINTAGENT_TEMPLATE_CONFIG")

        return cls(
            queue_path=path_setting("PRINTAGENT_QUEUE_PATH", "queue"),
            output_path=path_setting("PRINTAGENT_OUTPUT_PATH", "output"),
            templates_path=templates_path,
            template_config_path=(
                path_setting("PRINTAGENT_TEMPLATE_CONFIG", template_config)
                if template_config
                else templates_path / DEFAULT_TEMPLATE_CONFIG_NAME
            ),
            printers_file=path_setting("PRINTAGENT_PRINTERS_FILE", "printers.yaml"),
            logs_path=path_setting("PRINTAGENT_LOGS_PATH", "logs"),
            latex_compiler=environ.get("LATEX_COMPILER") or "pdflatex",
            lp_path=environ.get("PRINTAGENT_LP") or "lp",
            lpstat_path=environ.get("PRINTAGENT_LPSTAT") or "lpstat",
            render_timeout_s=_optional_float(
                environ.get("PRINTAGENT_RENDER_TIMEOUT"), "PRINTAGENT_RENDER_TIMEOUT"
            ),
            max_concurrent_jobs=_non_negative_int(
                environ.get("PRINTAGENT_MAX_CONCURRENT_JOBS"), "PRINTAGENT_MAX_CONCURRENT_JOBS"
            ),
        )

    def ensure_directories(self) -> None:
        """Create the queue, output and logs directories if they are missing."""
        for directory in (self.queue_path, self.output_path, self.logs_path):
            directory.mkdir(parents=True, exist_ok=True)
