"""
Agent assembly.

Builds the pipeline and watcher from an AgentConfig: registries are loaded
once here and passed by reference into the pipeline.
"""

import asyncio
from typing import Optional

from printagent.contexts.pipeline.job_pipeline import JobPipeline
from printagent.contexts.pipeline.logger import _log_info, setup_agent_logger
from printagent.contexts.pipeline.watcher import JobStoreWatcher
from printagent.contexts.printing.cups import CupsOutputSink, CupsPrinterDirectory
from printagent.contexts.printing.printer_base import OutputSink, PrinterDirectory
from printagent.contexts.printing.printer_registry import PrinterAliasMap
from printagent.contexts.rendering.compiler import LatexRenderer, Renderer
from printagent.contexts.templating.exceptions import TemplateConfigError
from printagent.contexts.templating.registries import TemplateRegistry
from printagent.contexts.templating.template_adapter import TemplateRenderingAdapter
from printagent.utils.config import AgentConfig, ConfigurationError
from printagent.utils.event_logging import JobEventLog


def build_pipeline(
    config: AgentConfig,
    renderer: Optional[Renderer] = None,
    printer_directory: Optional[PrinterDirectory] = None,
    output_sink: Optional[OutputSink] = None,
) -> JobPipeline:
    """
    Load registries and wire collaborators into a JobPipeline.

    CUPS and the configured LaTeX engine are used unless replacements are given.

    Raises:
        ConfigurationError: If the template registry or alias map cannot be loaded
    """
    try:
        registry = TemplateRegistry.from_config_file(
            config.template_config_path, config.templates_path
        )
    except TemplateConfigError as e:
        raise ConfigurationError(str(e)) from e

    alias_map = PrinterAliasMap.from_file(config.printers_file)

    _log_info(f"Templates: {', '.join(registry.names()) or 'none'}")
    _log_info(f"Printer aliases: {dict(alias_map) or 'none'}")

    return JobPipeline(
        templates=TemplateRenderingAdapter(
            registry,
            renderer or LatexRenderer(config.latex_compiler, timeout=config.render_timeout_s),
        ),
        alias_map=alias_map,
        printer_directory=printer_directory or CupsPrinterDirectory(config.lpstat_path),
        output_sink=output_sink or CupsOutputSink(config.lp_path),
        output_path=config.output_path,
        event_log=JobEventLog(config.events_file),
    )


def build_watcher(config: AgentConfig, pipeline: JobPipeline) -> JobStoreWatcher:
    return JobStoreWatcher(
        config.queue_path,
        pipeline.process_job,
        max_concurrent_jobs=config.max_concurrent_jobs,
    )


def start_agent(config: AgentConfig) -> JobStoreWatcher:
    """
    Bootstrap directories and logging, then build the watcher.

    Returns the watcher; run it with asyncio.run(watcher.run()).
    """
    config.ensure_directories()
    setup_agent_logger(
        config.logs_path,
        extra_provenance={
            "Queue": config.queue_path,
            "Output": config.output_path,
            "Templates": config.template_config_path,
            "LaTeX compiler": config.latex_compiler,
        },
    )
    pipeline = build_pipeline(config)
    return build_watcher(config, pipeline)


def run_agent(config: AgentConfig) -> None:
    """Run the agent until interrupted (Ctrl+C)."""
    watcher = start_agent(config)
    _log_info("Printer agent running...")
    try:
        asyncio.run(watcher.run())
    except KeyboardInterrupt:
        _log_info("Printer agent stopped")
