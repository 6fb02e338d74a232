"""init command — interactive setup wizard.

Writes .pull2press.yml once so every later command runs without flags:
which provider generates posts, and whether posts are saved locally.
"""

from __future__ import annotations

from pathlib import Path

import click
import yaml

from pull2press_cli.common import console

_API_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


@click.command("init")
@click.pass_context
def init_cmd(ctx):
    """Set up pull2press in the current directory.

    Creates (or updates) .pull2press.yml with your provider and store choice.
    """
    console.print("\n[bold cyan]pull2press init[/bold cyan] — setup wizard\n")

    # --- Choose provider ---
    console.print("Generation provider:")
    console.print("  [bold]openai[/bold]     — call OpenAI directly (needs OPENAI_API_KEY)")
    console.print("  [bold]anthropic[/bold]  — call Anthropic directly (needs ANTHROPIC_API_KEY)")
    console.print("  [bold]proxy[/bold]      — call a `pull2press serve` instance that holds the key")
    provider = click.prompt(
        "Provider",
        type=click.Choice(["openai", "anthropic", "proxy"]),
        default="openai",
    )

    config: dict = {"provider": provider}
    if provider == "proxy":
        config["proxy_url"] = click.prompt("Proxy base URL", default="http://127.0.0.1:8000")

    # --- Choose store backend ---
    console.print("\nPost store:")
    console.print("  [bold]none[/bold]    — no persistence (every run generates anew)")
    console.print("  [bold]sqlite[/bold]  — local SQLite file: history, editing and caching")
    store_type = click.prompt(
        "Store backend",
        type=click.Choice(["none", "sqlite"]),
        default="sqlite",
    )

    if store_type == "sqlite":
        db_path = click.prompt("SQLite database path", default=".pull2press.db")
        config["store"] = "sqlite"
        if db_path != ".pull2press.db":
            config["store_path"] = db_path
        console.print(f"[green]SQLite store configured at {db_path}[/green]")
    else:
        config["store"] = "noop"

    # --- Write .pull2press.yml ---
    config_path = Path(ctx.parent.params.get("config_path") or ".pull2press.yml") if ctx.parent else Path(".pull2press.yml")
    _write_config(config_path, config)
    console.print(f"[green]Wrote {config_path}[/green]")

    api_key_env = _API_KEY_ENV.get(provider)
    if api_key_env:
        console.print(f"\n[yellow]Remember to export [bold]{api_key_env}[/bold] before generating.[/yellow]")

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print("Generate a post with: [bold]pull2press generate https://github.com/<owner>/<repo>/pull/<n>[/bold]")


def _write_config(path: Path, config: dict) -> None:
    """Write or update the config file, preserving any existing keys."""
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))
