"""SQLiteStore — local file-based store for posts and preferences.

Schema:
  cached_posts      — one row per generated post; content is overwritten in
                      place on edit/regeneration, never versioned.
  user_preferences  — one row per user; writing samples as a JSON array.

The draft auto-saver writes from a timer thread, so the connection is opened
with check_same_thread=False and every statement runs under a lock.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from contextlib import contextmanager

from pull2press_store.base import BaseStore, PersistenceError
from pull2press_store.models import CachedPost, PreferencesRecord, utc_now

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS cached_posts (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    pr_url          TEXT NOT NULL,
    title           TEXT,
    content         TEXT NOT NULL DEFAULT '',
    user_id         TEXT NOT NULL,
    is_draft        INTEGER NOT NULL DEFAULT 0,
    created_at      TEXT,
    updated_at      TEXT,
    embedding_json  TEXT
);
CREATE INDEX IF NOT EXISTS idx_posts_user ON cached_posts (user_id, updated_at);
CREATE INDEX IF NOT EXISTS idx_posts_pr   ON cached_posts (pr_url, user_id);

CREATE TABLE IF NOT EXISTS user_preferences (
    user_id              TEXT PRIMARY KEY,
    writing_samples_json TEXT DEFAULT '[]',
    preferred_tone       TEXT DEFAULT 'professional',
    preferred_length     TEXT DEFAULT 'medium',
    custom_instructions  TEXT,
    created_at           TEXT,
    updated_at           TEXT
);
"""


class SQLiteStore(BaseStore):
    """Stores posts and preferences in a local SQLite database file.

    The database file path defaults to `.pull2press.db` in the current working
    directory. Configure via .pull2press.yml: `store_path: /path/to/posts.db`.
    """

    def __init__(self, db_path: str = ".pull2press.db"):
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.executescript(_SCHEMA)
            self._conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not open SQLite store at {db_path}: {e}") from e

    @contextmanager
    def _cursor(self, action: str):
        with self._lock:
            try:
                yield self._conn
                self._conn.commit()
            except sqlite3.Error as e:
                self._conn.rollback()
                logger.warning("SQLiteStore.%s failed: %s", action, e)
                raise PersistenceError(f"Could not {action}: {e}") from e

    # ------------------------------------------------------------------ #
    # Posts                                                                #
    # ------------------------------------------------------------------ #

    def save_post(self, post: CachedPost) -> CachedPost:
        with self._cursor("save post") as conn:
            cur = conn.execute(
                """
                INSERT INTO cached_posts
                  (pr_url, title, content, user_id, is_draft, created_at, updated_at, embedding_json)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    post.pr_url,
                    post.title,
                    post.content,
                    post.user_id,
                    int(post.is_draft),
                    post.created_at,
                    post.updated_at,
                    json.dumps(post.embedding) if post.embedding is not None else None,
                ),
            )
            post.id = cur.lastrowid
        return post

    def get_post(self, post_id: int) -> CachedPost | None:
        with self._cursor("load post") as conn:
            row = conn.execute("SELECT * FROM cached_posts WHERE id=?", (post_id,)).fetchone()
        return self._row_to_post(row) if row else None

    def find_post(self, pr_url: str, user_id: str) -> CachedPost | None:
        with self._cursor("look up post") as conn:
            row = conn.execute(
                "SELECT * FROM cached_posts WHERE pr_url=? AND user_id=? ORDER BY updated_at DESC, id DESC LIMIT 1",
                (pr_url, user_id),
            ).fetchone()
        return self._row_to_post(row) if row else None

    def update_post(
        self,
        post_id: int,
        *,
        content: str,
        title: str | None = None,
        is_draft: bool | None = None,
    ) -> CachedPost | None:
        assignments = ["content=?", "updated_at=?"]
        params: list = [content, utc_now()]
        if title is not None:
            assignments.append("title=?")
            params.append(title)
        if is_draft is not None:
            assignments.append("is_draft=?")
            params.append(int(is_draft))
        params.append(post_id)

        with self._cursor("update post") as conn:
            cur = conn.execute(f"UPDATE cached_posts SET {', '.join(assignments)} WHERE id=?", params)
            updated = cur.rowcount > 0
        return self.get_post(post_id) if updated else None

    def list_posts(self, user_id: str, limit: int | None = None) -> list[CachedPost]:
        query = "SELECT * FROM cached_posts WHERE user_id=? ORDER BY updated_at DESC, id DESC"
        params: tuple = (user_id,)
        if limit is not None:
            query += " LIMIT ?"
            params = (user_id, limit)
        with self._cursor("list posts") as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_post(r) for r in rows]

    def delete_post(self, post_id: int) -> bool:
        with self._cursor("delete post") as conn:
            cur = conn.execute("DELETE FROM cached_posts WHERE id=?", (post_id,))
            return cur.rowcount > 0

    # ------------------------------------------------------------------ #
    # Preferences                                                          #
    # ------------------------------------------------------------------ #

    def get_preferences(self, user_id: str) -> PreferencesRecord | None:
        with self._cursor("load preferences") as conn:
            row = conn.execute("SELECT * FROM user_preferences WHERE user_id=?", (user_id,)).fetchone()
        if row is None:
            return None
        return PreferencesRecord(
            user_id=row["user_id"],
            writing_samples=json.loads(row["writing_samples_json"] or "[]"),
            preferred_tone=row["preferred_tone"] or "professional",
            preferred_length=row["preferred_length"] or "medium",
            custom_instructions=row["custom_instructions"],
            created_at=row["created_at"] or "",
            updated_at=row["updated_at"] or "",
        )

    def save_preferences(self, record: PreferencesRecord) -> None:
        record.updated_at = utc_now()
        with self._cursor("save preferences") as conn:
            conn.execute(
                """
                INSERT INTO user_preferences
                  (user_id, writing_samples_json, preferred_tone, preferred_length,
                   custom_instructions, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(user_id) DO UPDATE SET
                  writing_samples_json=excluded.writing_samples_json,
                  preferred_tone=excluded.preferred_tone,
                  preferred_length=excluded.preferred_length,
                  custom_instructions=excluded.custom_instructions,
                  updated_at=excluded.updated_at
                """,
                (
                    record.user_id,
                    json.dumps(record.writing_samples),
                    record.preferred_tone,
                    record.preferred_length,
                    record.custom_instructions,
                    record.created_at,
                    record.updated_at,
                ),
            )

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    @staticmethod
    def _row_to_post(row: sqlite3.Row) -> CachedPost:
        embedding = json.loads(row["embedding_json"]) if row["embedding_json"] else None
        return CachedPost(
            id=row["id"],
            pr_url=row["pr_url"],
            title=row["title"] or "",
            content=row["content"] or "",
            user_id=row["user_id"],
            is_draft=bool(row["is_draft"]),
            created_at=row["created_at"] or "",
            updated_at=row["updated_at"] or "",
            embedding=embedding,
        )
