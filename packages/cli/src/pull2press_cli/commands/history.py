"""history / show / delete commands — browse saved posts."""

from __future__ import annotations

import click
from rich.table import Table

from pull2press_cli.common import console, pipeline_errors, require_store, user_id


def _owned_post(ctx, post_id: int):
    post = require_store(ctx).get_post(post_id)
    if post is None or post.user_id != user_id(ctx):
        raise click.ClickException(f"Post #{post_id} not found.")
    return post


@click.command("history")
@click.option("--limit", default=20, show_default=True, help="Maximum number of posts to show.")
@click.option("--drafts", "drafts_only", is_flag=True, help="Only show posts with unsaved auto-saved edits.")
@click.pass_context
def history_cmd(ctx, limit: int, drafts_only: bool):
    """Show your saved blog posts, most recently updated first.

    Reads from the configured store. Run `pull2press init` to set up a store
    if you haven't already.
    """
    store = require_store(ctx)
    uid = user_id(ctx)

    with pipeline_errors():
        posts = store.list_posts(uid, limit=None if drafts_only else limit)
    if drafts_only:
        posts = [p for p in posts if p.is_draft][:limit]
    if not posts:
        console.print("[yellow]No saved posts found.[/yellow]")
        return

    table = Table(title=f"Saved Posts — {uid}", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="bold", justify="right", width=5)
    table.add_column("Title", max_width=40)
    table.add_column("Pull Request", max_width=50)
    table.add_column("Status", width=8)
    table.add_column("Updated At", width=20)

    for p in posts:
        status = "[yellow]draft[/yellow]" if p.is_draft else "[green]saved[/green]"
        table.add_row(
            str(p.id),
            p.title[:40] if p.title else "",
            p.pr_url,
            status,
            p.updated_at[:19].replace("T", " "),
        )

    console.print(table)


@click.command("show")
@click.argument("post_id", type=int)
@click.pass_context
def show_cmd(ctx, post_id: int):
    """Print a saved post's markdown."""
    with pipeline_errors():
        post = _owned_post(ctx, post_id)
    click.echo(post.content)


@click.command("delete")
@click.argument("post_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def delete_cmd(ctx, post_id: int, yes: bool):
    """Delete a saved post."""
    with pipeline_errors():
        post = _owned_post(ctx, post_id)
        if not yes:
            click.confirm(f"Delete post #{post_id} ({post.title})?", abort=True)
        require_store(ctx).delete_post(post_id)
    console.print(f"[green]Deleted post #{post_id}.[/green]")
