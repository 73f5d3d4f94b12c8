"""Topic classification of search results by keyword presence."""

from typing import Optional

# Checked in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("runes", ("rune", "$state", "$effect")),
    ("components", ("component", "lifecycle")),
    ("routing", ("route", "navigation", "sveltekit")),
    ("error", ("error", "warning", "debug")),
)


def determine_category(content: str) -> Optional[str]:
    """Return the topic category of a piece of content, or None."""
    lower_content = content.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lower_content for keyword in keywords):
            return category
    return None
