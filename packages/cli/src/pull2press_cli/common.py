"""Glue shared by the CLI commands: store access, record mapping, error mapping.

The CLI owns the mapping between core types and store records. Core has
no store knowledge and the store has no core knowledge.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

import click
from rich.console import Console

from pull2press_core.config import find_preset
from pull2press_core.errors import ConfigurationError, InvalidInputError, Pull2PressError, RateLimitError
from pull2press_core.models import CustomOption, PresetOption, RegenerationOptions, UserPreferences, UserStyleOption
from pull2press_store.base import BaseStore, PersistenceError
from pull2press_store.models import PreferencesRecord
from pull2press_store.noop import NoOpStore

console = Console()
logger = logging.getLogger(__name__)

NO_STORE_MESSAGE = (
    "No store configured. Add 'store: sqlite' to .pull2press.yml, or run `pull2press init` to set one up."
)


def get_store(ctx: click.Context) -> BaseStore:
    store = ctx.obj.get("store") if ctx.obj else None
    return store if store is not None else NoOpStore()


def require_store(ctx: click.Context) -> BaseStore:
    """Return the configured store, or fail for commands that only make sense with persistence."""
    store = get_store(ctx)
    if isinstance(store, NoOpStore):
        raise click.UsageError(NO_STORE_MESSAGE)
    return store


def user_id(ctx: click.Context) -> str:
    return ctx.obj.get("user_id", "local") if ctx.obj else "local"


@contextmanager
def pipeline_errors():
    """Turn pipeline errors into one-line CLI failures instead of tracebacks."""
    try:
        yield
    except ConfigurationError as e:
        raise click.UsageError(str(e))
    except RateLimitError as e:
        raise click.ClickException(f"Rate limited: {e}")
    except InvalidInputError as e:
        raise click.BadParameter(str(e))
    except Pull2PressError as e:
        raise click.ClickException(str(e))
    except PersistenceError as e:
        raise click.ClickException(f"Storage error: {e}")
    except FileNotFoundError as e:
        # Custom presets path from the config file.
        raise click.ClickException(str(e))


def warn_not_saved(e: PersistenceError) -> None:
    """Persistence failures never abort a generation; the user still gets the content."""
    logger.warning("Could not persist post: %s", e)
    console.print(f"[yellow]Warning: the post could not be saved ({e}).[/yellow]")


def to_preferences(record: PreferencesRecord | None) -> UserPreferences | None:
    if record is None:
        return None
    return UserPreferences(
        user_id=record.user_id,
        writing_samples=list(record.writing_samples),
        preferred_tone=record.preferred_tone,
        preferred_length=record.preferred_length,
        custom_instructions=record.custom_instructions,
    )


def load_preferences(store: BaseStore, uid: str) -> UserPreferences | None:
    """Saved preferences for ``uid``; a failed read degrades to no personalisation."""
    try:
        return to_preferences(store.get_preferences(uid))
    except PersistenceError as e:
        logger.warning("Could not load preferences for %s: %s", uid, e)
        return None


def get_or_create_preferences(store: BaseStore, uid: str) -> PreferencesRecord:
    """Preferences are created lazily, the first time a user opens them."""
    record = store.get_preferences(uid)
    if record is None:
        record = PreferencesRecord(user_id=uid)
        store.save_preferences(record)
    return record


def build_options(
    presets: list,
    preset_name: str | None,
    prompt: str | None,
    my_style: bool,
    temperature: float | None,
) -> RegenerationOptions | None:
    """Map mutually exclusive CLI flags onto one RegenerationOptions variant."""

    chosen = [flag for flag, value in (("--preset", preset_name), ("--prompt", prompt), ("--my-style", my_style)) if value]
    if len(chosen) > 1:
        raise click.UsageError(f"Options {', '.join(chosen)} are mutually exclusive.")

    if preset_name:
        preset = find_preset(presets, preset_name)
        if preset is None:
            names = ", ".join(p.name for p in presets)
            raise click.BadParameter(f"Unknown preset {preset_name!r}. Available: {names}", param_hint="--preset")
        return PresetOption(preset=preset, temperature=temperature)
    if prompt:
        return CustomOption(prompt=prompt, temperature=temperature)
    if my_style or temperature is not None:
        return UserStyleOption(temperature=temperature)
    return None
