"""
Category table for the Braindump categorizer.

Eleven fixed categories, each with an icon, a keyword list and a list of
regex patterns. Patterns are stored as strings with inline flags so that a
localized set can be supplied from config.toml without code changes.
"""

import logging
import re
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from braindump.errors import ConfigError

logger = logging.getLogger(__name__)

FALLBACK_CATEGORY = "notatka"


class CategoryDefinition(BaseModel):
    """One category: display icon plus its lexical and pattern triggers."""

    name: str = Field(min_length=1)
    icon: str = Field(min_length=1, description="Short display glyph")
    keywords: list[str] = Field(default_factory=list, description="Lowercase substrings")
    patterns: list[re.Pattern] = Field(default_factory=list, description="Searched, not full-matched")

    @field_validator("keywords")
    @classmethod
    def lowercase_keywords(cls, keywords: list[str]) -> list[str]:
        return [keyword.lower() for keyword in keywords]


CategoryTable = dict[str, CategoryDefinition]


# Table order is the tie-break order: on equal scores the earlier entry wins.
# A `$` anchor here means end of text, hence `\Z` (Python's `$` also matches
# before a trailing newline). Word and digit classes are spelled out as ASCII
# ranges: `\w` and `\d` would also match letters like "ż" and non-Latin digits.
DEFAULT_CATEGORIES: dict[str, dict[str, Any]] = {
    "zadanie": {
        "icon": "✅",
        "keywords": [
            "zrobić", "kupić", "zadzwonić", "wysłać", "sprawdzić", "naprawić",
            "umówić", "zapłacić", "oddać", "odebrać", "przygotować", "dokończyć",
            "todo", "task", "must", "trzeba", "muszę", "należy", "pamiętaj",
        ],
        "patterns": [r"(?m)^[-•*]\s", r"(?m)^[0-9]+[.)]\s", r"(?i)do zrobienia", r"(?i)lista"],
    },
    "pomysł": {
        "icon": "💡",
        "keywords": [
            "pomysł", "idea", "może", "można by", "co jeśli", "a gdyby",
            "warto by", "fajnie by było", "koncept", "innowacja", "projekt",
        ],
        "patterns": [r"(?i)^co (jeśli|gdyby)", r"(?i)^a (może|gdyby)", r"!"],
    },
    "pytanie": {
        "icon": "❓",
        "keywords": [
            "dlaczego", "jak", "kiedy", "gdzie", "kto", "co", "czy",
            "który", "ile", "czemu", "po co", "skąd",
        ],
        "patterns": [r"\?\Z", r"\?[.!\s]*\Z", r"(?i)^(jak|dlaczego|kiedy|gdzie|kto|co|czy)"],
    },
    "praca": {
        "icon": "💼",
        "keywords": [
            "spotkanie", "meeting", "deadline", "projekt", "klient", "szef",
            "zespół", "prezentacja", "raport", "email", "mail", "firma",
            "biuro", "praca", "zlecenie", "kontrakt", "umowa", "faktura",
        ],
        "patterns": [r"@[A-Za-z0-9_]+", r"(?i)deadline", r"(?i)ASAP"],
    },
    "zakupy": {
        "icon": "🛒",
        "keywords": [
            "kupić", "sklep", "zakupy", "lista zakupów", "zamówić",
            "cena", "promocja", "rabat", "allegro", "amazon", "olx",
        ],
        "patterns": [r"(?i)[0-9]+\s*(zł|pln|€|\$)", r"(?i)kupić"],
    },
    "wydarzenie": {
        "icon": "📅",
        "keywords": [
            "spotkanie", "wizyta", "urodziny", "rocznica", "impreza",
            "koncert", "wyjazd", "lot", "rezerwacja", "termin", "data",
        ],
        "patterns": [
            r"[0-9]{1,2}[./\-][0-9]{1,2}",
            r"o\s+[0-9]{1,2}:[0-9]{2}",
            r"(?i)(poniedziałek|wtorek|środa|czwartek|piątek|sobota|niedziela)",
            r"(?i)(styczeń|luty|marzec|kwiecień|maj|czerwiec|lipiec|sierpień"
            r"|wrzesień|październik|listopad|grudzień)",
        ],
    },
    "notatka": {
        "icon": "📝",
        "keywords": ["notatka", "zapamiętać", "ważne", "uwaga", "info", "informacja"],
        "patterns": [],
    },
    "inspiracja": {
        "icon": "✨",
        "keywords": [
            "cytat", "motywacja", "inspiracja", "marzenie", "cel", "sukces",
            "motto", "życie", "przyszłość", "wizja",
        ],
        "patterns": [r'^["„“”]', r'["”]\Z'],
    },
    "kontakt": {
        "icon": "👤",
        "keywords": ["telefon", "numer", "adres", "email", "kontakt", "osoba"],
        "patterns": [r"[0-9]{3}[\s\-]?[0-9]{3}[\s\-]?[0-9]{3}", r"\S+@\S+\.\S+"],
    },
    "finanse": {
        "icon": "💰",
        "keywords": [
            "pieniądze", "kasa", "przelew", "rachunek", "opłata", "rata",
            "kredyt", "oszczędności", "budżet", "wydatek", "koszt", "pensja",
        ],
        "patterns": [r"(?i)[0-9]+\s*(zł|pln|€|\$|tys)"],
    },
    "zdrowie": {
        "icon": "🏥",
        "keywords": [
            "lekarz", "wizyta", "lek", "tabletki", "recepta", "badanie",
            "dentysta", "szpital", "zdrowie", "dieta", "trening", "siłownia",
        ],
        "patterns": [],
    },
}


def build_category_table(overrides: dict[str, dict[str, Any]] | None = None) -> CategoryTable:
    """
    Build a fresh category table from the built-in definitions.

    Overrides map a category name to any of:
    - icon: replaces the icon
    - keywords: appended (lower-cased) to the built-in list
    - patterns: replace the built-in pattern list

    Unknown category names are ignored; the category set is fixed.
    Raises ConfigError for an invalid regex or an empty icon.
    """
    overrides = overrides or {}

    for name in overrides:
        if name not in DEFAULT_CATEGORIES:
            logger.warning("Ignoring config for unknown category: %s", name)

    table: CategoryTable = {}
    for name, data in DEFAULT_CATEGORIES.items():
        override = overrides.get(name, {})
        keywords = list(data["keywords"])
        keywords.extend(str(k).lower() for k in override.get("keywords", []))

        try:
            table[name] = CategoryDefinition(
                name=name,
                icon=override.get("icon", data["icon"]),
                keywords=keywords,
                patterns=list(override.get("patterns", data["patterns"])),
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid definition for category '{name}': {e}") from e

    return table
