"""style commands — manage writing samples and tone/length preferences."""

from __future__ import annotations

from pathlib import Path

import click
from rich.panel import Panel

from pull2press_cli.common import console, get_or_create_preferences, pipeline_errors, require_store, user_id
from pull2press_core.style import analyze_writing_style, style_guidance


@click.group("style")
def style_group():
    """Manage the writing style used by `--my-style`."""


@style_group.command("show")
@click.pass_context
def show_style(ctx):
    """Show your saved preferences and the style detected from your samples."""
    store = require_store(ctx)
    with pipeline_errors():
        record = get_or_create_preferences(store, user_id(ctx))

    console.print(f"[bold]Tone:[/bold] {record.preferred_tone}")
    console.print(f"[bold]Length:[/bold] {record.preferred_length}")
    if record.custom_instructions:
        console.print(f"[bold]Instructions:[/bold] {record.custom_instructions}")
    console.print(f"[bold]Writing samples:[/bold] {len(record.writing_samples)}")

    if record.writing_samples:
        style = analyze_writing_style(record.writing_samples)
        console.print(
            f"\n[bold]Detected style:[/bold] {style.tone}, {style.vocabulary_level} vocabulary, "
            f"{style.structure_preference} structure, ~{style.avg_sentence_length:.0f} words per sentence"
        )
        console.print(Panel(style_guidance(style), title="Guidance sent to the model", expand=False))


@style_group.command("add-sample")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def add_sample(ctx, files: tuple[str, ...]):
    """Add writing samples (markdown or text files you wrote)."""
    store = require_store(ctx)
    samples = [Path(f).read_text() for f in files]
    samples = [s for s in samples if s.strip()]
    if not samples:
        raise click.BadParameter("All given files are empty.", param_hint="FILES")

    with pipeline_errors():
        record = get_or_create_preferences(store, user_id(ctx))
        record.writing_samples.extend(samples)
        store.save_preferences(record)
    console.print(f"[green]Added {len(samples)} sample(s); {len(record.writing_samples)} saved.[/green]")


@style_group.command("set")
@click.option("--tone", type=click.Choice(["casual", "professional", "technical"]), default=None)
@click.option("--length", type=click.Choice(["short", "medium", "long"]), default=None)
@click.option("--instructions", default=None, help="Extra instructions added to every prompt. Pass '' to clear.")
@click.pass_context
def set_style(ctx, tone: str | None, length: str | None, instructions: str | None):
    """Set your preferred tone, length and custom instructions."""
    if tone is None and length is None and instructions is None:
        raise click.UsageError("Nothing to set. Pass --tone, --length or --instructions.")

    store = require_store(ctx)
    with pipeline_errors():
        record = get_or_create_preferences(store, user_id(ctx))
        if tone is not None:
            record.preferred_tone = tone
        if length is not None:
            record.preferred_length = length
        if instructions is not None:
            record.custom_instructions = instructions or None
        store.save_preferences(record)
    console.print("[green]Preferences saved.[/green]")


@style_group.command("clear-samples")
@click.pass_context
def clear_samples(ctx):
    """Remove all saved writing samples."""
    store = require_store(ctx)
    with pipeline_errors():
        record = get_or_create_preferences(store, user_id(ctx))
        removed = len(record.writing_samples)
        record.writing_samples = []
        store.save_preferences(record)
    console.print(f"[green]Removed {removed} sample(s).[/green]")
