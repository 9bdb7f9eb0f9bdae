"""
Rule-based categorizer for Braindump.

Scores a thought against every category in the table:
+2 for each keyword found in the lower-cased text,
+3 for each regex pattern found in the original text.
The highest score wins; no signal at all falls back to the note category.
No external API, no hidden state beyond the owned category table.
"""

import logging
import re
import threading
from typing import Any

from pydantic import BaseModel, Field

from braindump.categories import FALLBACK_CATEGORY, CategoryTable, build_category_table
from braindump.errors import ConfigError

logger = logging.getLogger(__name__)

KEYWORD_SCORE = 2
PATTERN_SCORE = 3

# Approximate score at which we consider a categorization certain.
# Hand-picked, not derived from the table.
DEFAULT_CONFIDENCE_DIVISOR = 15.0

HASHTAG_RE = re.compile(r"#([A-Za-z0-9_]+)")
MENTION_RE = re.compile(r"@([A-Za-z0-9_]+)")


class CategorizationResult(BaseModel):
    """Outcome of categorizing one piece of text."""

    category: str
    icon: str
    confidence: float = Field(ge=0, le=1, description="Heuristic, not a probability")


class Categorizer:
    """Keyword and pattern scoring over a category table it owns."""

    def __init__(
        self,
        table: CategoryTable | None = None,
        fallback: str = FALLBACK_CATEGORY,
        confidence_divisor: float = DEFAULT_CONFIDENCE_DIVISOR,
    ):
        self.table = table if table is not None else build_category_table()
        self.fallback = fallback
        self.confidence_divisor = float(confidence_divisor)
        self._lock = threading.Lock()

        if self.fallback not in self.table:
            raise ConfigError(f"Fallback category '{self.fallback}' is not in the category table")
        if self.confidence_divisor <= 0:
            raise ConfigError("confidence_divisor must be positive")

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "Categorizer":
        """Build a categorizer from a loaded config dict."""
        settings = config.get("categorizer", {})
        return cls(
            table=build_category_table(config.get("categories")),
            fallback=settings.get("fallback", FALLBACK_CATEGORY),
            confidence_divisor=settings.get("confidence_divisor", DEFAULT_CONFIDENCE_DIVISOR),
        )

    def _fallback_result(self) -> CategorizationResult:
        return CategorizationResult(
            category=self.fallback,
            icon=self.table[self.fallback].icon,
            confidence=0.0,
        )

    def scores(self, text: Any) -> dict[str, int]:
        """Score every category, in table order. Non-text input scores zero everywhere."""
        if not isinstance(text, str) or not text:
            return {name: 0 for name in self.table}

        normalized = text.lower().strip()
        scores: dict[str, int] = {}

        for name, definition in self.table.items():
            score = 0

            # One hit per keyword entry, however often it occurs in the text
            for keyword in definition.keywords:
                if keyword in normalized:
                    score += KEYWORD_SCORE

            # Patterns see the original text: case and anchors matter
            for pattern in definition.patterns:
                if pattern.search(text):
                    score += PATTERN_SCORE

            scores[name] = score

        return scores

    def categorize(self, text: Any) -> CategorizationResult:
        """
        Categorize a thought.

        Never raises: None, empty or non-string input returns the fallback
        category with confidence 0.
        """
        if not isinstance(text, str) or not text:
            return self._fallback_result()

        scores = self.scores(text)

        # Strictly greater only: ties keep the earlier category, zero keeps the fallback
        best_category = self.fallback
        best_score = 0
        for category, score in scores.items():
            if score > best_score:
                best_score = score
                best_category = category

        logger.debug("Scores for %r: %s -> %s", text[:40], scores, best_category)

        return CategorizationResult(
            category=best_category,
            icon=self.table[best_category].icon,
            confidence=min(best_score / self.confidence_divisor, 1.0),
        )

    def extract_tags(self, text: Any) -> list[str]:
        """Extract #hashtags and @mentions (without the marker), de-duplicated."""
        if not isinstance(text, str) or not text:
            return []

        tags = HASHTAG_RE.findall(text) + MENTION_RE.findall(text)
        return list(dict.fromkeys(tags))

    def get_all_categories(self) -> list[dict[str, str]]:
        """List every category with its icon, in table order."""
        return [{"name": name, "icon": definition.icon} for name, definition in self.table.items()]

    def add_keyword(self, category: str, keyword: str) -> None:
        """
        Append a lower-cased keyword to a category.

        Unknown categories are ignored. No de-duplication: a repeated keyword
        adds its score once per entry.
        """
        if not isinstance(category, str) or not isinstance(keyword, str):
            return
        definition = self.table.get(category)
        if definition is None:
            return

        with self._lock:
            # Swap in a new list so readers never see a half-updated one
            definition.keywords = [*definition.keywords, keyword.lower()]

        logger.info("Learned keyword '%s' for %s", keyword.lower(), category)


_default_categorizer: Categorizer | None = None


def get_categorizer() -> Categorizer:
    """Get the shared categorizer built from the user's config."""
    global _default_categorizer
    if _default_categorizer is None:
        from braindump.config import load_config
        _default_categorizer = Categorizer.from_config(load_config())
    return _default_categorizer


def categorize_text(text: Any) -> CategorizationResult:
    """Convenience function to categorize a single text."""
    return get_categorizer().categorize(text)
