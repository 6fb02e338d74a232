"""presets command — list the regeneration presets."""

from __future__ import annotations

import click
from rich.table import Table

from pull2press_cli.common import console
from pull2press_core.config import load_presets


@click.command("presets")
@click.pass_context
def presets_cmd(ctx):
    """List the presets available to `pull2press regenerate --preset`.

    Set 'presets: path/to/presets.yml' in .pull2press.yml to use your own.
    """
    try:
        presets = load_presets(ctx.obj["config"])
    except FileNotFoundError as e:
        raise click.ClickException(str(e))

    table = Table(title="Regeneration Presets", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Description", max_width=60)
    table.add_column("Temperature", justify="right", width=11)

    for p in presets:
        name = f"{p.name} [dim](default)[/dim]" if p.is_default else p.name
        table.add_row(name, p.description, f"{p.temperature:.1f}")

    console.print(table)
