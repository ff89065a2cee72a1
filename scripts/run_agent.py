#!/usr/bin/env python3
"""
Printer Agent CLI

Watches the queue directory and processes job files as they arrive.

Commands:
    watch     - Run the agent until interrupted (default)
    process   - Run the pipeline once on a single job file
    templates - List registered templates

Examples:\n

    run_agent.py watch                       # Watch the configured queue

    run_agent.py process queue/order-17.json # Process one job file now

    run_agent.py templates                   # Show template registry
"""

import asyncio
from pathlib import Path

import typer
from typing_extensions import Annotated

from printagent.contexts.pipeline import build_pipeline, run_agent
from printagent.contexts.pipeline.logger import setup_agent_logger
from printagent.contexts.templating import TemplateConfigError, TemplateRegistry
from printagent.utils.config import AgentConfig, ConfigurationError

app = typer.Typer(
    help="Folder-based print job processor",
    add_completion=False,
    invoke_without_command=True,
)


def load_config() -> AgentConfig:
    try:
        return AgentConfig.from_env()
    except ConfigurationError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(ctx: typer.Context):
    """Run the watcher by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        watch()


@app.command("watch")
def watch():
    """
    Watch the queue directory and process every job file dropped into it.

    Configuration comes from environment variables (or a .env file).
    Stop with Ctrl+C; in-flight jobs are finished first.
    """
    config = load_config()
    try:
        run_agent(config)
    except ConfigurationError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("process")
def process_command(
    job_file: Annotated[
        Path,
        typer.Argument(help="Job descriptor file to process (it is deleted afterwards)"),
    ],
):
    """
    Run the pipeline once on a single job file and show the outcome.

    Examples:\n

        $ run_agent.py process queue/order-17.json
    """
    if not job_file.is_file():
        typer.secho(f"Job file not found: {job_file}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    config = load_config()
    config.ensure_directories()
    setup_agent_logger(config.logs_path)
    try:
        pipeline = build_pipeline(config)
    except ConfigurationError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    outcome = asyncio.run(pipeline.process_job(job_file))

    typer.echo("")
    color = typer.colors.RED if outcome.kind.discarded else typer.colors.GREEN
    typer.secho(f"Outcome: {outcome.kind.value}", fg=color, bold=True)
    typer.echo(f"  Job: {outcome.job_id or '-'}")
    typer.echo(f"  Printed: {'yes' if outcome.printed else 'no'}")
    if outcome.artifact_path:
        typer.echo(f"  PDF: {outcome.artifact_path}")
    for error in outcome.errors:
        typer.secho(f"  - {error}", fg=typer.colors.YELLOW)

    if outcome.kind.discarded:
        raise typer.Exit(code=1)


@app.command("templates")
def templates_command():
    """List registered templates and their page layout."""
    config = load_config()
    try:
        registry = TemplateRegistry.from_config_file(
            config.template_config_path, config.templates_path
        )
    except TemplateConfigError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nTemplates ({config.template_config_path}):", fg=typer.colors.BLUE, bold=True)
    for name in registry.names():
        descriptor = registry.get_descriptor(name)
        layout = descriptor.format or (f"width {descriptor.width}" if descriptor.width else "default")
        exists = registry.get_template_path(name).exists()
        marker = "" if exists else typer.style("  (file missing)", fg=typer.colors.RED)
        typer.echo(f"  {name:<16} {descriptor.file:<28} {layout}{marker}")


if __name__ == "__main__":
    app()
