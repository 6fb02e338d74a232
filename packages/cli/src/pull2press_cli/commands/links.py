"""links command — suggest further reading for a saved post."""

from __future__ import annotations

import click

from pull2press_cli.common import console, pipeline_errors, require_store, user_id
from pull2press_core.links import DEFAULT_MAX_LINKS, find_helpful_links, format_links_as_markdown, insert_links_into_content
from pull2press_core.pipeline import get_generator


@click.command("links")
@click.argument("post_id", type=int)
@click.option("--topic", default=None, help="Focus the suggestions on this topic.")
@click.option("--max-links", default=DEFAULT_MAX_LINKS, show_default=True, type=click.IntRange(1, 20))
@click.option("--append", is_flag=True, help="Append the links section to the saved post.")
@click.pass_context
def links_cmd(ctx, post_id: int, topic: str | None, max_links: int, append: bool):
    """Find helpful external resources for a saved post."""
    store = require_store(ctx)

    with pipeline_errors():
        post = store.get_post(post_id)
        if post is None or post.user_id != user_id(ctx):
            raise click.ClickException(f"Post #{post_id} not found.")
        generator = get_generator(ctx.obj["config"])
        with console.status("Finding helpful links…"):
            result = find_helpful_links(post.content, generator, topic=topic, max_links=max_links)

    if not result.links:
        console.print("[yellow]No links found.[/yellow]")
        return

    click.echo(format_links_as_markdown(result.links))

    if append:
        with pipeline_errors():
            store.update_post(post_id, content=insert_links_into_content(post.content, result.links))
        console.print(f"[green]Appended {len(result.links)} link(s) to post #{post_id}.[/green]")
