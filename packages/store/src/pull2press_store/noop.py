"""No-op store — the default when no store is configured.

Posts are generated and shown but not persisted anywhere. Using a NoOpStore
rather than None lets the CLI always call store methods without
conditional checks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pull2press_store.base import BaseStore

if TYPE_CHECKING:
    from pull2press_store.models import CachedPost, PreferencesRecord


class NoOpStore(BaseStore):
    """Silently discards everything; zero configuration required.

    save_post() hands the post back unchanged (``id`` stays None), which is
    how callers can tell nothing was persisted.
    """

    def save_post(self, post: CachedPost) -> CachedPost:
        return post

    def get_post(self, post_id: int) -> CachedPost | None:
        return None

    def find_post(self, pr_url: str, user_id: str) -> CachedPost | None:
        return None

    def update_post(
        self,
        post_id: int,
        *,
        content: str,
        title: str | None = None,
        is_draft: bool | None = None,
    ) -> CachedPost | None:
        return None

    def list_posts(self, user_id: str, limit: int | None = None) -> list[CachedPost]:
        return []

    def delete_post(self, post_id: int) -> bool:
        return False

    def get_preferences(self, user_id: str) -> PreferencesRecord | None:
        return None

    def save_preferences(self, record: PreferencesRecord) -> None:
        pass  # intentional no-op
