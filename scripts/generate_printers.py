#!/usr/bin/env python3
"""
Printer alias map generator.

Lists the printers installed in CUPS and writes a starter alias map
(printers.yaml) mapping pos/office/kitchen to matching printer names.
Edit the file afterwards to fix up any mapping.
"""

from pathlib import Path
from typing import Optional

import typer

from printagent.contexts.printing import CupsPrinterDirectory, PrinterError
from printagent.contexts.printing.discovery import build_alias_map, write_alias_map
from printagent.utils.config import AgentConfig

app = typer.Typer(
    add_completion=False,
    help="Generate printers.yaml from installed printers",
)


@app.command()
def generate(
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Alias map file to write (default: PRINTAGENT_PRINTERS_FILE)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Show the mapping without writing it"
    ),
):
    """
    Detect printers and write the alias map.

    Examples:\n

        $ python scripts/generate_printers.py                  # Write printers.yaml

        $ python scripts/generate_printers.py --dry-run        # Preview only
    """
    config = AgentConfig.from_env()

    try:
        printers = CupsPrinterDirectory(config.lpstat_path).list_printers()
    except PrinterError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho("Detected printers:", fg=typer.colors.BLUE, bold=True)
    for i, name in enumerate(printers, 1):
        typer.echo(f"{i}. {name}")
    if not printers:
        typer.secho("  (none)", fg=typer.colors.YELLOW)

    aliases = build_alias_map(printers)

    typer.echo("")
    for alias, name in aliases.items():
        typer.echo(f"  {alias:<10} -> {name or '(unmapped)'}")

    if dry_run:
        return

    path = write_alias_map(aliases, output or config.printers_file)
    typer.secho(f"\n✓ {path} generated", fg=typer.colors.GREEN, bold=True)


if __name__ == "__main__":
    app()
