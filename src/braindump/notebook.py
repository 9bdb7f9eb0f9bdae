"""
Notebook module for Braindump.

Capture, edit and delete notes. Every save goes through the categorizer;
edits are re-categorized from scratch.
"""

import random
import time
from datetime import datetime, timezone
from typing import Any

from braindump.categorizer import Categorizer
from braindump.config import load_config
from braindump.db import Database
from braindump.errors import NoteNotFoundError

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(number: int) -> str:
    """Encode a non-negative integer in base 36."""
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Generate a unique note ID (base36 ms timestamp + random suffix)."""
    millis = int(time.time() * 1000)
    suffix = "".join(random.choice(_BASE36) for _ in range(8))
    return to_base36(millis) + suffix


class Notebook:
    """Stores notes with their categorization attached."""

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        db: Database | None = None,
        categorizer: Categorizer | None = None,
    ):
        self.config = config or load_config()
        self.db = db or Database()
        # Learned keywords are replayed only into a categorizer built here
        if categorizer is None:
            categorizer = Categorizer.from_config(self.config)
            for category, keyword in self.db.get_learned_keywords():
                categorizer.add_keyword(category, keyword)
        self.categorizer = categorizer

    def add(self, text: str) -> dict[str, Any]:
        """
        Capture a thought.

        Returns the stored note. Raises ValueError on empty text.
        """
        content = (text or "").strip()
        if not content:
            raise ValueError("Empty thought")

        result = self.categorizer.categorize(content)
        now = datetime.now(timezone.utc).isoformat()

        note = {
            "id": generate_id(),
            "content": content,
            "category": result.category,
            "category_icon": result.icon,
            "confidence": result.confidence,
            "tags": self.categorizer.extract_tags(content),
            "created_at": now,
            "updated_at": now,
        }
        self.db.insert_note(note)
        return note

    def edit(self, note_id: str, text: str) -> dict[str, Any]:
        """
        Replace a note's content and re-categorize it.

        Tags keep the values extracted at capture time.
        """
        content = (text or "").strip()
        if not content:
            raise ValueError("Note cannot be empty")

        result = self.categorizer.categorize(content)
        updated = self.db.update_note(
            note_id,
            content=content,
            category=result.category,
            category_icon=result.icon,
            confidence=result.confidence,
        )
        if not updated:
            raise NoteNotFoundError(note_id)

        note = self.db.get_note(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        return note

    def delete(self, note_id: str) -> bool:
        """Delete a note. Returns False if it didn't exist."""
        return self.db.delete_note(note_id)

    def get(self, note_id: str) -> dict[str, Any]:
        """Get a note by ID or raise NoteNotFoundError."""
        note = self.db.get_note(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        return note

    def list_notes(self, category: str | None = None, limit: int | None = None) -> list[dict[str, Any]]:
        """Notes newest first, optionally only one category."""
        return self.db.get_notes(category=category, limit=limit)

    def categories(self) -> list[dict[str, str]]:
        """Every category the categorizer knows, with icons."""
        return self.categorizer.get_all_categories()

    def learn(self, category: str, keyword: str) -> bool:
        """
        Teach the categorizer a new keyword and remember it.

        Returns False (and changes nothing) for an unknown category or an
        empty keyword.
        """
        keyword = (keyword or "").strip()
        if category not in self.categorizer.table or not keyword:
            return False

        self.categorizer.add_keyword(category, keyword)
        self.db.add_learned_keyword(category, keyword.lower())
        return True


def capture(text: str) -> dict[str, Any]:
    """Convenience function to capture a single thought."""
    notebook = Notebook()
    return notebook.add(text)
