"""Persisted records: cached posts and per-user preferences.

Decoupled from pull2press_core so the store layer can be used independently
and pull2press_core has no knowledge of persistence concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class CachedPost:
    """A generated blog post for one PR and one user.

    Holds exactly one current ``content`` string: regeneration and edits
    overwrite it, no earlier versions are kept. ``id`` is None until the
    store assigns one in save_post().
    """

    pr_url: str
    title: str
    content: str
    user_id: str
    is_draft: bool = False
    id: Optional[int] = None
    created_at: str = field(default_factory=utc_now)  # ISO-8601 UTC timestamp
    updated_at: str = field(default_factory=utc_now)
    embedding: Optional[list[float]] = None  # stored opaquely, never computed here


@dataclass
class PreferencesRecord:
    """A user's style settings, created lazily the first time they are read."""

    user_id: str
    writing_samples: list[str] = field(default_factory=list)
    preferred_tone: str = "professional"  # casual | professional | technical
    preferred_length: str = "medium"  # short | medium | long
    custom_instructions: Optional[str] = None
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)
