"""
Surfacing module for Braindump.

Terminal rendering of notes, categories and categorizer scores.
"""

import os
from datetime import datetime, timezone
from typing import Any

from braindump.categorizer import Categorizer
from braindump.db import Database


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    # Foreground colors
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    WHITE = "\033[37m"

    # Bright foreground colors
    BRIGHT_CYAN = "\033[96m"

    @classmethod
    def enabled(cls) -> bool:
        """Check if colors should be enabled."""
        # Disable if NO_COLOR is set
        if os.environ.get("NO_COLOR"):
            return False
        return True


def c(text: str, *codes: str) -> str:
    """Apply color codes to text if colors are enabled."""
    if not Colors.enabled():
        return text
    return "".join(codes) + text + Colors.RESET


# Short month names as used in Polish dates ("5 paź")
MONTHS_SHORT = ["sty", "lut", "mar", "kwi", "maj", "cze", "lip", "sie", "wrz", "paź", "lis", "gru"]


def format_relative_date(when: datetime | str, now: datetime | None = None) -> str:
    """
    Human-friendly age of a note.

    Under a week: "przed chwilą", "N min temu", "N godz. temu", "N dni temu".
    Older: day and short month, with the year only if it isn't this year.
    """
    if isinstance(when, str):
        when = datetime.fromisoformat(when)
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    seconds = (now - when).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "przed chwilą"
    if minutes < 60:
        return f"{minutes} min temu"
    if hours < 24:
        return f"{hours} godz. temu"
    if days < 7:
        return f"{days} dni temu"

    label = f"{when.day} {MONTHS_SHORT[when.month - 1]}"
    if when.year != now.year:
        label += f" {when.year}"
    return label


def truncate_text(text: str, max_length: int) -> str:
    """Cut text to max_length characters, marking the cut with '...'."""
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def format_note_line(note: dict[str, Any], width: int = 60, now: datetime | None = None) -> str:
    """One list row: id, icon + category, age, content preview, tags."""
    id_str = c(f"{note['id']:21}", Colors.DIM)
    category_str = c(f"{note['category_icon']} {note['category']:11}", Colors.BRIGHT_CYAN)
    age_str = c(f"{format_relative_date(note['created_at'], now=now):>14}", Colors.DIM)
    preview = truncate_text(note["content"].replace("\n", " "), width)

    line = f"{id_str}  {category_str}  {age_str}  {preview}"
    if note.get("tags"):
        line += " " + c(" ".join(f"#{tag}" for tag in note["tags"]), Colors.YELLOW)
    return line


def format_notes(
    notes: list[dict[str, Any]],
    category: str | None = None,
    width: int = 60,
    now: datetime | None = None,
) -> str:
    """Render a list of notes with a header, or the empty-state message."""
    if not notes:
        if category:
            return c(f"No notes in category '{category}'.", Colors.DIM)
        return c("No notes yet. Capture one with: braindump \"your thought\"", Colors.DIM)

    header_text = "NOTES"
    if category:
        header_text = f"NOTES: {category.upper()}"

    lines = [c(f"━━━ {header_text} ({len(notes)}) ━━━", Colors.BOLD, Colors.BLUE), ""]
    for note in notes:
        lines.append(format_note_line(note, width=width, now=now))

    return "\n".join(lines)


def get_notes_formatted(
    db: Database | None = None,
    category: str | None = None,
    limit: int | None = 50,
    width: int = 60,
) -> str:
    """Get notes as formatted string with colors."""
    db = db or Database()
    notes = db.get_notes(category=category, limit=limit)
    return format_notes(notes, category=category, width=width)


def format_note_detail(note: dict[str, Any]) -> str:
    """Full view of a single note."""
    lines = [
        c(f"{note['category_icon']} {note['category']}", Colors.BOLD, Colors.BRIGHT_CYAN)
        + c(f"  (confidence {note['confidence']:.2f})", Colors.DIM),
        c(f"id: {note['id']}  created: {format_relative_date(note['created_at'])}", Colors.DIM),
        "",
        note["content"],
    ]
    if note.get("tags"):
        lines.append("")
        lines.append(c(" ".join(f"#{tag}" for tag in note["tags"]), Colors.YELLOW))
    return "\n".join(lines)


def format_categories(categories: list[dict[str, str]], used: list[str] | None = None) -> str:
    """List categories with icons; mark the ones that have notes."""
    used_set = set(used or [])
    lines = [c("━━━ CATEGORIES ━━━", Colors.BOLD, Colors.BLUE), ""]

    for category in categories:
        marker = c(" •", Colors.GREEN) if category["name"] in used_set else ""
        lines.append(f"  {category['icon']} {category['name']}{marker}")

    return "\n".join(lines)


def format_scores(text: str, categorizer: Categorizer) -> str:
    """Dry-run view: winning category plus every non-zero score."""
    result = categorizer.categorize(text)
    scores = categorizer.scores(text)

    lines = [
        c(f"{result.icon} {result.category}", Colors.BOLD, Colors.BRIGHT_CYAN)
        + c(f"  (confidence {result.confidence:.2f})", Colors.DIM),
        "",
    ]

    ranked = [(name, score) for name, score in scores.items() if score > 0]
    ranked.sort(key=lambda x: -x[1])  # stable: table order on ties
    if not ranked:
        lines.append(c("No keyword or pattern matched.", Colors.DIM))
    for name, score in ranked:
        icon = categorizer.table[name].icon
        lines.append(f"  {icon} {name:12} {score:>3}")

    tags = categorizer.extract_tags(text)
    if tags:
        lines.append("")
        lines.append("Tags: " + c(" ".join(f"#{tag}" for tag in tags), Colors.YELLOW))

    return "\n".join(lines)


def format_stats(stats: dict[str, Any], icons: dict[str, str] | None = None) -> str:
    """Render database statistics."""
    icons = icons or {}
    lines = ["Braindump Statistics", "-" * 30, f"Total notes: {stats['total_notes']}"]

    if stats.get("by_category"):
        lines.append("\nBy category:")
        for category, count in stats["by_category"].items():
            icon = icons.get(category, " ")
            lines.append(f"  {icon} {category}: {count}")

    lines.append(f"\nLearned keywords: {stats.get('learned_keywords', 0)}")
    return "\n".join(lines)
