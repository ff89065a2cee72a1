"""Unit tests for agent assembly from configuration."""

import asyncio
from dataclasses import replace

import pytest
from conftest import FIXED_MOMENT, FakeOutputSink, FakePrinterDirectory, FakeRenderer

from printagent.contexts.pipeline.bootstrap import build_pipeline, build_watcher
from printagent.contexts.pipeline.outcome import OutcomeKind
from printagent.contexts.printing.cups import CupsOutputSink, CupsPrinterDirectory
from printagent.contexts.rendering.compiler import LatexRenderer
from printagent.utils.config import AgentConfig, ConfigurationError


@pytest.fixture
def config(tmp_path, templates_dir, queue_dir, output_dir) -> AgentConfig:
    printers = tmp_path / "printers.yaml"
    printers.write_text("pos: TM-T20\n")
    return AgentConfig(
        queue_path=queue_dir,
        output_path=output_dir,
        templates_path=templates_dir,
        template_config_path=templates_dir / "template_config.yaml",
        printers_file=printers,
        logs_path=tmp_path / "logs",
        latex_compiler="lualatex",
        render_timeout_s=30.0,
        max_concurrent_jobs=3,
    )


@pytest.mark.unit
def test_defaults_use_cups_and_configured_engine(config):
    pipeline = build_pipeline(config)

    assert isinstance(pipeline.printer_directory, CupsPrinterDirectory)
    assert isinstance(pipeline.output_sink, CupsOutputSink)
    renderer = pipeline.templates.renderer
    assert isinstance(renderer, LatexRenderer)
    assert renderer.engine == "lualatex"
    assert renderer.timeout == 30.0
    assert pipeline.alias_map.resolve("pos") == "TM-T20"
    assert pipeline.templates.registry.names() == ["ghost", "invoice", "receipt"]


@pytest.mark.unit
def test_missing_template_config_is_fatal(config, tmp_path):
    broken = replace(config, template_config_path=tmp_path / "nowhere.yaml")

    with pytest.raises(ConfigurationError):
        build_pipeline(broken)


@pytest.mark.unit
def test_missing_printers_file_means_no_aliases(config, tmp_path):
    no_aliases = replace(config, printers_file=tmp_path / "absent.yaml")

    pipeline = build_pipeline(no_aliases, renderer=FakeRenderer())

    assert len(pipeline.alias_map) == 0


@pytest.mark.unit
def test_watcher_runs_built_pipeline(config, queue_dir, output_dir):
    sink = FakeOutputSink()
    pipeline = build_pipeline(
        config,
        renderer=FakeRenderer(),
        printer_directory=FakePrinterDirectory(["TM-T20"]),
        output_sink=sink,
    )
    pipeline.clock = lambda: FIXED_MOMENT
    watcher = build_watcher(config, pipeline)
    (queue_dir / "order.json").write_text('{"invoiceNo": "A1", "printerName": "pos"}')

    assert watcher.max_concurrent_jobs == 3

    async def scenario():
        watcher.dispatch_existing()
        await watcher.drain()

    asyncio.run(scenario())

    assert [s["printer"] for s in sink.submissions] == ["TM-T20"]
    assert list(queue_dir.iterdir()) == []
    assert list(output_dir.iterdir()) == []
    events = pipeline.event_log.read_all()
    assert events[-1]["event_type"] == "cleaned"
    assert events[-1]["result"] == OutcomeKind.PRINTED.value
