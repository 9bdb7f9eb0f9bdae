"""
Database module for Braindump.

SQLite used as a flat note store keyed by note ID.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

from braindump.config import get_db_path

logger = logging.getLogger(__name__)

# Schema version for migrations
SCHEMA_VERSION = 1

SCHEMA = """
-- Schema version tracking
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
);

-- Notes, one row per captured thought
CREATE TABLE IF NOT EXISTS notes (
    id TEXT PRIMARY KEY,
    content TEXT NOT NULL,
    category TEXT NOT NULL,
    category_icon TEXT NOT NULL,
    confidence REAL NOT NULL,
    tags TEXT NOT NULL DEFAULT '[]',        -- JSON array
    created_at TEXT NOT NULL,               -- ISO 8601
    updated_at TEXT NOT NULL
);

-- Keywords taught by the user, replayed into the categorizer on startup
CREATE TABLE IF NOT EXISTS learned_keywords (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category TEXT NOT NULL,
    keyword TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_notes_category ON notes(category);
CREATE INDEX IF NOT EXISTS idx_notes_created ON notes(created_at);
"""


def _row_to_note(row: sqlite3.Row) -> dict[str, Any]:
    note = dict(row)
    note["tags"] = json.loads(note.get("tags") or "[]")
    return note


class Database:
    """SQLite database wrapper for Braindump."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()
        self._ensure_db()

    def _ensure_db(self) -> None:
        """Ensure database exists and schema is current."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.executescript(SCHEMA)
            # Set schema version
            conn.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (SCHEMA_VERSION,)
            )

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def insert_note(self, note: dict[str, Any]) -> str:
        """Insert a categorized note. Returns note ID."""
        now = datetime.now(timezone.utc).isoformat()

        with self._connect() as conn:
            conn.execute("""
                INSERT INTO notes (
                    id, content, category, category_icon,
                    confidence, tags, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                note["id"],
                note["content"],
                note["category"],
                note["category_icon"],
                note.get("confidence", 0.0),
                json.dumps(note.get("tags", []), ensure_ascii=False),
                note.get("created_at", now),
                note.get("updated_at", now),
            ))

        logger.info("Saved note %s as %s", note["id"], note["category"])
        return note["id"]

    def get_note(self, note_id: str) -> dict[str, Any] | None:
        """Get a single note by ID."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM notes WHERE id = ?", (note_id,)
            ).fetchone()
            if row:
                return _row_to_note(row)
        return None

    def get_notes(
        self,
        category: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Get notes, newest first, optionally filtered by category."""
        query = "SELECT * FROM notes WHERE 1=1"
        params: list[Any] = []

        if category:
            query += " AND category = ?"
            params.append(category)

        query += " ORDER BY created_at DESC, rowid DESC"

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
            return [_row_to_note(row) for row in rows]

    def update_note(
        self,
        note_id: str,
        content: str,
        category: str,
        category_icon: str,
        confidence: float,
    ) -> bool:
        """Replace a note's content and categorization. Returns True if found."""
        now = datetime.now(timezone.utc).isoformat()

        with self._connect() as conn:
            cursor = conn.execute("""
                UPDATE notes
                SET content = ?, category = ?, category_icon = ?,
                    confidence = ?, updated_at = ?
                WHERE id = ?
            """, (content, category, category_icon, confidence, now, note_id))
            updated = cursor.rowcount > 0

        if updated:
            logger.info("Updated note %s as %s", note_id, category)
        return updated

    def delete_note(self, note_id: str) -> bool:
        """Delete a note. Returns True if it existed."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM notes WHERE id = ?", (note_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Deleted note %s", note_id)
        return deleted

    def get_categories(self) -> list[str]:
        """Categories currently in use, ordered by their most recent note."""
        with self._connect() as conn:
            rows = conn.execute("""
                SELECT category, MAX(created_at) AS latest FROM notes
                GROUP BY category
                ORDER BY latest DESC
            """).fetchall()
            return [row["category"] for row in rows]

    def add_learned_keyword(self, category: str, keyword: str) -> None:
        """Persist a user-taught keyword."""
        now = datetime.now(timezone.utc).isoformat()

        with self._connect() as conn:
            conn.execute(
                "INSERT INTO learned_keywords (category, keyword, created_at) VALUES (?, ?, ?)",
                (category, keyword, now),
            )

    def get_learned_keywords(self) -> list[tuple[str, str]]:
        """All user-taught (category, keyword) pairs, oldest first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT category, keyword FROM learned_keywords ORDER BY id"
            ).fetchall()
            return [(row["category"], row["keyword"]) for row in rows]

    def get_stats(self) -> dict[str, Any]:
        """Get database statistics."""
        with self._connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM notes").fetchone()[0]
            by_category = dict(conn.execute("""
                SELECT category, COUNT(*) FROM notes GROUP BY category
                ORDER BY COUNT(*) DESC
            """).fetchall())
            learned = conn.execute("SELECT COUNT(*) FROM learned_keywords").fetchone()[0]

            return {
                "total_notes": total,
                "by_category": by_category,
                "learned_keywords": learned,
            }
