"""generate / regenerate commands — run the PR → blog post pipeline."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path

import click
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from pull2press_cli.common import (
    build_options,
    console,
    get_store,
    load_preferences,
    pipeline_errors,
    require_store,
    user_id,
    warn_not_saved,
)
from pull2press_core.config import load_presets
from pull2press_core.gh.pull_request import get_github
from pull2press_core.models import FetchProgress
from pull2press_core.pipeline import generate_post, get_generator, stream_post
from pull2press_store.base import PersistenceError
from pull2press_store.models import CachedPost

logger = logging.getLogger(__name__)


def _style_options(f):
    """Options shared by generate and regenerate: how the post should be written."""
    f = click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Also write the post to this file.")(f)
    f = click.option("--stream", is_flag=True, help="Print the post as it is generated.")(f)
    f = click.option("--temperature", type=float, default=None, help="Sampling temperature between 0 and 1.")(f)
    f = click.option("--my-style", "my_style", is_flag=True, help="Write in the style of your saved writing samples.")(f)
    f = click.option("--prompt", default=None, help="Custom instructions replacing the default writing brief.")(f)
    f = click.option("--preset", "preset_name", default=None, help="Regeneration preset name (see `pull2press presets`).")(f)
    return f


@contextmanager
def _progress_bar():
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.percentage:>3.0f}%"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Starting…", total=100)

        def report(p: FetchProgress) -> None:
            progress.update(task, completed=p.progress, description=p.message)

        yield report


def _run_pipeline(ctx, config: dict, pr_url: str, options, stream: bool) -> tuple[str, str]:
    """Fetch, compose and generate. Returns (title, content)."""
    store = get_store(ctx)
    generator = get_generator(config)
    github = get_github(config.get("github_token"))
    preferences = load_preferences(store, user_id(ctx))

    if not stream:
        with _progress_bar() as report:
            post = generate_post(
                pr_url, generator, github, preferences=preferences, options=options, config=config, on_progress=report
            )
        click.echo(post.content)
        return post.title, post.content

    with _progress_bar() as report:
        prepared, chunks = stream_post(
            pr_url, generator, github, preferences=preferences, options=options, config=config, on_progress=report
        )
    parts: list[str] = []
    for delta in chunks:
        parts.append(delta)
        click.echo(delta, nl=False)
    click.echo()
    return prepared.pr_data.title, "".join(parts)


def _write_output(output: str | None, content: str) -> None:
    if output:
        Path(output).write_text(content)
        console.print(f"[green]Wrote {output}[/green]")


@click.command("generate")
@click.argument("pr_url")
@_style_options
@click.option(
    "--provider",
    type=click.Choice(["openai", "anthropic", "proxy"]),
    default=None,
    help="Generation provider. Overrides config file.",
)
@click.option("--force", is_flag=True, help="Generate again even if a post for this PR is already saved.")
@click.pass_context
def generate_cmd(
    ctx,
    pr_url: str,
    preset_name: str | None,
    prompt: str | None,
    my_style: bool,
    temperature: float | None,
    stream: bool,
    output: str | None,
    provider: str | None,
    force: bool,
):
    """Generate a blog post from a GitHub pull request URL.

    If a post for this PR was saved before, it is shown instead of calling
    the model again; pass --force to generate a fresh one.

    \b
    Environment variables:
      GITHUB_TOKEN          GitHub token (or use gh CLI); optional for public repos
      OPENAI_API_KEY        Required when provider is openai
      ANTHROPIC_API_KEY     Required when provider is anthropic
      PULL2PRESS_PROXY_URL  Base URL of a `pull2press serve` instance (provider proxy)
    """
    config = dict(ctx.obj["config"])
    if provider:
        config["provider"] = provider
    store = get_store(ctx)
    uid = user_id(ctx)

    if not force:
        try:
            cached = store.find_post(pr_url, uid)
        except PersistenceError as e:
            logger.warning("Cache lookup failed: %s", e)
            cached = None
        if cached is not None:
            console.print(f"[dim]Showing saved post #{cached.id}. Use --force to generate a new one.[/dim]")
            click.echo(cached.content)
            _write_output(output, cached.content)
            return

    with pipeline_errors():
        presets = load_presets(config) if preset_name else []
        options = build_options(presets, preset_name, prompt, my_style, temperature)
        title, content = _run_pipeline(ctx, config, pr_url, options, stream)

    _write_output(output, content)

    try:
        saved = store.save_post(CachedPost(pr_url=pr_url, title=title, content=content, user_id=uid))
    except PersistenceError as e:
        warn_not_saved(e)
        return
    if saved.id is not None:
        console.print(f"[dim]Saved as post #{saved.id}.[/dim]")


@click.command("regenerate")
@click.argument("post_id", type=int)
@_style_options
@click.pass_context
def regenerate_cmd(
    ctx,
    post_id: int,
    preset_name: str | None,
    prompt: str | None,
    my_style: bool,
    temperature: float | None,
    stream: bool,
    output: str | None,
):
    """Rewrite a saved post, overwriting its content.

    Choose at most one of --preset, --prompt or --my-style; --temperature
    applies on top of any of them.
    """
    store = require_store(ctx)
    config = ctx.obj["config"]

    with pipeline_errors():
        post = store.get_post(post_id)
        if post is None or post.user_id != user_id(ctx):
            raise click.ClickException(f"Post #{post_id} not found.")
        presets = load_presets(config) if preset_name else []
        options = build_options(presets, preset_name, prompt, my_style, temperature)
        title, content = _run_pipeline(ctx, config, post.pr_url, options, stream)

    _write_output(output, content)

    try:
        store.update_post(post_id, content=content, title=title, is_draft=False)
    except PersistenceError as e:
        warn_not_saved(e)
        return
    console.print(f"[dim]Updated post #{post_id}.[/dim]")
