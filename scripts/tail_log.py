#!/usr/bin/env python3
"""
View recent job events from the job event log (logs/job_events.log).

Provides filtered access to the event log with options to filter by
job identity and event type.
"""

import json
from typing import Optional

import typer

from printagent.utils.config import AgentConfig
from printagent.utils.event_logging import JobEventLog
from printagent.utils.timestamp import format_timestamp

app = typer.Typer(
    add_completion=False,
    help="View recent job events",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show the last 10 events when no command is provided."""
    if ctx.invoked_subcommand is None:
        show(n=10, job=None, event_type=None, compact=False)


@app.command()
def show(
    n: int = typer.Option(10, "--num", "-n", help="Number of recent events to show"),
    job: Optional[str] = typer.Option(None, "--job", "-j", help="Filter to events for this job"),
    event_type: Optional[str] = typer.Option(
        None, "--event-type", "-e", help="Filter to events of this type"
    ),
    compact: bool = typer.Option(
        False, "--compact", "-c", help="Print one event per line (no pretty formatting)"
    ),
):
    """
    Show the last n events from the job event log.

    Examples:\n

        $ python scripts/tail_log.py show                   # Last 10 events

        $ python scripts/tail_log.py show -e print_failed   # Last 10 print failures

        $ python scripts/tail_log.py show -n 5 -j INV-001   # Last 5 events for a job
    """
    event_log = JobEventLog(AgentConfig.from_env().events_file)
    events = event_log.get_recent_events(n=n, job_id=job, event_type=event_type)

    if not events:
        typer.secho("No events found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    if not compact:
        filters = []
        if job:
            filters.append(f"job={job}")
        if event_type:
            filters.append(f"type={event_type}")
        suffix = f" [{', '.join(filters)}]" if filters else ""
        typer.secho(f"\nShowing last {len(events)} event(s){suffix}:", fg=typer.colors.BLUE)
        typer.echo("")

    for event in events:
        if compact:
            typer.echo(json.dumps(event))
        else:
            typer.echo(json.dumps(event, indent=2))
            typer.echo("")


@app.command()
def track(
    job: str = typer.Argument(..., help="Job identity to track"),
    relative: bool = typer.Option(
        False, "--relative", "-r", help="Show relative timestamps (e.g., '2h ago')"
    ),
):
    """
    Show the lifecycle of one job, oldest event first.

    Examples:\n

        $ python scripts/tail_log.py track INV-001
    """
    event_log = JobEventLog(AgentConfig.from_env().events_file)
    events = event_log.get_recent_events(n=10_000, job_id=job)

    if not events:
        typer.secho(f"No events found for {job}", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    typer.secho(f"\nLifecycle of {job}:", fg=typer.colors.BLUE, bold=True)
    for event in events:
        when = format_timestamp(event.get("timestamp", ""), relative=relative)
        detail = event.get("error") or event.get("artifact_path") or event.get("printer") or ""
        typer.echo(f"  {when}  {event['event_type']:<16} {detail}")
    typer.echo("")


if __name__ == "__main__":
    app()
