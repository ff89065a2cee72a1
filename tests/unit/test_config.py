"""Unit tests for AgentConfig."""

from pathlib import Path

import pytest

from printagent.utils.config import AgentConfig, ConfigurationError


@pytest.mark.unit
def test_defaults_resolve_against_root(tmp_path):
    config = AgentConfig.from_env({"PRINTAGENT_ROOT": str(tmp_path)})

    assert config.queue_path == tmp_path / "queue"
    assert config.output_path == tmp_path / "output"
    assert config.templates_path == tmp_path / "templates"
    assert config.template_config_path == tmp_path / "templates" / "template_config.yaml"
    assert config.printers_file == tmp_path / "printers.yaml"
    assert config.events_file == tmp_path / "logs" / "job_events.log"
    assert config.latex_compiler == "pdflatex"
    assert config.render_timeout_s is None
    assert config.max_concurrent_jobs == 0


@pytest.mark.unit
def test_overrides(tmp_path):
    config = AgentConfig.from_env(
        {
            "PRINTAGENT_ROOT": str(tmp_path),
            "PRINTAGENT_QUEUE_PATH": "/srv/jobs",
            "PRINTAGENT_TEMPLATES_PATH": "tpl",
            "PRINTAGENT_TEMPLATE_CONFIG": "tpl/custom.yaml",
            "LATEX_COMPILER": "xelatex",
            "PRINTAGENT_RENDER_TIMEOUT": "45",
            "PRINTAGENT_MAX_CONCURRENT_JOBS": "4",
        }
    )

    assert config.queue_path == Path("/srv/jobs")
    assert config.template_config_path == tmp_path / "tpl" / "custom.yaml"
    assert config.latex_compiler == "xelatex"
    assert config.render_timeout_s == 45.0
    assert config.max_concurrent_jobs == 4


@pytest.mark.unit
@pytest.mark.parametrize(
    "key, value",
    [
        ("PRINTAGENT_RENDER_TIMEOUT", "soon"),
        ("PRINTAGENT_MAX_CONCURRENT_JOBS", "many"),
        ("PRINTAGENT_MAX_CONCURRENT_JOBS", "-1"),
    ],
)
def test_invalid_numbers(tmp_path, key, value):
    with pytest.raises(ConfigurationError):
        AgentConfig.from_env({"PRINTAGENT_ROOT": str(tmp_path), key: value})


@pytest.mark.unit
def test_ensure_directories(tmp_path):
    config = AgentConfig.from_env({"PRINTAGENT_ROOT": str(tmp_path)})

    config.ensure_directories()

    assert config.queue_path.is_dir()
    assert config.output_path.is_dir()
    assert config.logs_path.is_dir()
