"""edit command — change a saved post by hand.

Three ways in:
  pull2press edit 3                 open $EDITOR, save on exit
  pull2press edit 3 --from-file f   replace the content with a file, once
  pull2press edit 3 --watch f       keep saving drafts while f changes
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable

import click

from pull2press_cli.common import console, pipeline_errors, require_store, user_id
from pull2press_core.drafts import DraftAutoSaver

logger = logging.getLogger(__name__)

_POLL_INTERVAL = 0.25


def watch_file(
    path: Path,
    on_change: Callable[[str], None],
    interval: float = _POLL_INTERVAL,
    should_stop: Callable[[], bool] = lambda: False,
) -> None:
    """Poll ``path`` and call ``on_change(text)`` whenever its contents change."""
    last = path.read_text() if path.exists() else None
    while not should_stop():
        time.sleep(interval)
        if not path.exists():
            continue
        text = path.read_text()
        if text != last:
            last = text
            on_change(text)


@click.command("edit")
@click.argument("post_id", type=int)
@click.option(
    "--from-file",
    "from_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Replace the post content with this file.",
)
@click.option(
    "--watch",
    "watch_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the post to this file and auto-save drafts as it changes. Ctrl-C to stop.",
)
@click.pass_context
def edit_cmd(ctx, post_id: int, from_file: str | None, watch_path: str | None):
    """Edit a saved post.

    Edits saved on exit (or via --from-file) clear the draft flag. In --watch
    mode every change is saved as a draft once you pause typing; the final
    content is saved when you stop watching.
    """
    if from_file and watch_path:
        raise click.UsageError("Options --from-file and --watch are mutually exclusive.")

    store = require_store(ctx)
    with pipeline_errors():
        post = store.get_post(post_id)
    if post is None or post.user_id != user_id(ctx):
        raise click.ClickException(f"Post #{post_id} not found.")

    if watch_path:
        _watch_and_autosave(ctx, store, post, Path(watch_path))
        return

    if from_file:
        content = Path(from_file).read_text()
    else:
        content = click.edit(post.content, extension=".md")
        if content is None:
            console.print("[yellow]No changes.[/yellow]")
            return

    if content == post.content:
        console.print("[yellow]No changes.[/yellow]")
        return

    with pipeline_errors():
        store.update_post(post_id, content=content, is_draft=False)
    console.print(f"[green]Saved post #{post_id}.[/green]")


def _watch_and_autosave(ctx, store, post, path: Path) -> None:
    config = ctx.obj["config"]
    delay = float(config.get("autosave_delay") or 1.0)

    path.write_text(post.content)
    saver = DraftAutoSaver(lambda content: store.update_post(post.id, content=content, is_draft=True), delay=delay)
    console.print(f"[cyan]Watching {path} — drafts auto-save {delay:g}s after your last change. Ctrl-C to stop.[/cyan]")

    try:
        watch_file(path, saver.schedule)
    except KeyboardInterrupt:
        pass
    finally:
        saver.flush()

    with pipeline_errors():
        store.update_post(post.id, content=path.read_text(), is_draft=False)
    console.print(f"\n[green]Saved post #{post.id} ({saver.saves} draft auto-saves).[/green]")
