"""Abstract store interface.

Any storage backend (SQLite, a hosted Postgres, a BaaS table) implements
this interface. The CLI and HTTP layers depend on BaseStore, not on a
concrete backend, so backends are swappable without touching them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pull2press_store.models import CachedPost, PreferencesRecord


class PersistenceError(Exception):
    """A write to or read from the backing store failed.

    Callers treat this as non-fatal: generated content is still shown to the
    user, it just is not saved.
    """


class BaseStore(ABC):
    """Pluggable persistence for cached posts and user preferences."""

    @abstractmethod
    def save_post(self, post: CachedPost) -> CachedPost:
        """Insert a new post and return it with ``id`` assigned."""

    @abstractmethod
    def get_post(self, post_id: int) -> CachedPost | None:
        """Return the post with this id, or None."""

    @abstractmethod
    def find_post(self, pr_url: str, user_id: str) -> CachedPost | None:
        """Return the user's most recent post for a PR URL, or None."""

    @abstractmethod
    def update_post(
        self,
        post_id: int,
        *,
        content: str,
        title: str | None = None,
        is_draft: bool | None = None,
    ) -> CachedPost | None:
        """Overwrite the post's content (and optionally title/draft flag).

        Returns the updated post, or None when no post has this id.
        """

    @abstractmethod
    def list_posts(self, user_id: str, limit: int | None = None) -> list[CachedPost]:
        """Return a user's posts, most recently updated first."""

    @abstractmethod
    def delete_post(self, post_id: int) -> bool:
        """Delete a post. Returns False when no post had this id."""

    @abstractmethod
    def get_preferences(self, user_id: str) -> PreferencesRecord | None:
        """Return the user's saved preferences, or None if never saved."""

    @abstractmethod
    def save_preferences(self, record: PreferencesRecord) -> None:
        """Create or replace the user's preferences."""

    def close(self) -> None:
        """Release any resources held by the store (connections, file handles).

        Optional. Subclasses that need cleanup should override this.
        Default is a no-op so callers can always call close() safely.
        """
