"""CLI entry point for pull2press.

Commands:
  generate    — turn a pull request URL into a blog post (cached per user)
  regenerate  — rewrite a saved post with a preset, custom prompt or your style
  history     — list saved posts
  show        — print a saved post
  edit        — edit a saved post; --watch auto-saves drafts while you type
  delete      — remove a saved post
  presets     — list the regeneration presets
  style       — manage writing samples and tone/length preferences
  links       — suggest further-reading links for a post
  assist      — rewrite a passage with the AI editing assistant
  serve       — run the HTTP generation proxy
  init        — interactive setup wizard
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console

from pull2press_cli.commands.assist import assist_cmd
from pull2press_cli.commands.edit import edit_cmd
from pull2press_cli.commands.generate import generate_cmd, regenerate_cmd
from pull2press_cli.commands.history import delete_cmd, history_cmd, show_cmd
from pull2press_cli.commands.init import init_cmd
from pull2press_cli.commands.links import links_cmd
from pull2press_cli.commands.presets import presets_cmd
from pull2press_cli.commands.serve import serve_cmd
from pull2press_cli.commands.style import style_group

console = Console()


def _build_store(config: dict):
    """Instantiate the configured store from .pull2press.yml settings.

    Store selection hierarchy:
      store: sqlite → SQLiteStore (requires store_path or uses .pull2press.db)
      (default)     → NoOpStore  (no persistence; nothing is cached)

    This factory lives in cli.py so neither pull2press_core nor pull2press_store
    know about the CLI config format.
    """
    from pull2press_store.noop import NoOpStore

    store_type = config.get("store", "noop")

    if store_type == "sqlite":
        from pull2press_store.sqlite import SQLiteStore

        db_path = config.get("store_path") or ".pull2press.db"
        return SQLiteStore(db_path=db_path)

    if store_type not in (None, "noop", "none"):
        console.print(f"[yellow]Unknown store {store_type!r}. Falling back to no store.[/yellow]")
    return NoOpStore()


def _configure_logging(verbose: bool) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("pull2press"),
    prog_name="pull2press",
)
@click.option(
    "--config",
    "config_path",
    default=".pull2press.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PULL2PRESS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log fetch and generation details to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Turn GitHub pull requests into first-person technical blog posts."""
    from pull2press_core.config import load_config
    from pull2press_cli.auth import resolve_github_token, resolve_user_id

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    config = load_config(config_path)

    # Resolve token early so all subcommands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    store = _build_store(config)
    ctx.obj["store"] = store
    ctx.obj["config"] = config
    ctx.obj["user_id"] = resolve_user_id(config)
    ctx.call_on_close(store.close)


main.add_command(generate_cmd)
main.add_command(regenerate_cmd)
main.add_command(history_cmd)
main.add_command(show_cmd)
main.add_command(edit_cmd)
main.add_command(delete_cmd)
main.add_command(presets_cmd)
main.add_command(style_group)
main.add_command(links_cmd)
main.add_command(assist_cmd)
main.add_command(serve_cmd)
main.add_command(init_cmd)
