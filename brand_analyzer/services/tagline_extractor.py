"""Tagline extraction as a strict ordered fallback chain.

Rules are evaluated lazily in table order; the first one that yields text
wins. There is no scoring or merging across rules.
"""

from typing import Callable, Sequence

from brand_analyzer.constants import (
    H1_TAGLINE_MAX_CHARS,
    SOCIAL_TAGLINE_MAX_CHARS,
    TAGLINE_MAX_CHARS,
    TAGLINE_MIN_CHARS,
    TAGLINE_SELECTORS,
)
from brand_analyzer.services.markup import MarkupDocument

TaglineRule = Callable[[MarkupDocument, str], str | None]


def _hero_text(document: MarkupDocument, description: str) -> str | None:
    for selector in TAGLINE_SELECTORS:
        text = document.first_text(selector)
        if TAGLINE_MIN_CHARS < len(text) < TAGLINE_MAX_CHARS:
            return text
    return None


def _short(value: str | None, limit: int) -> str | None:
    if value and len(value) < limit:
        return value
    return None


def _og_description(document: MarkupDocument, description: str) -> str | None:
    return _short(document.meta_property("og:description"), SOCIAL_TAGLINE_MAX_CHARS)


def _twitter_description(document: MarkupDocument, description: str) -> str | None:
    return _short(document.meta_name("twitter:description"), SOCIAL_TAGLINE_MAX_CHARS)


def _first_h1(document: MarkupDocument, description: str) -> str | None:
    return _short(document.first_h1_text(), H1_TAGLINE_MAX_CHARS)


def first_sentence(text: str) -> str:
    """Text up to (not including) the first period."""
    return (text or "").split(".")[0]


def _description_sentence(document: MarkupDocument, description: str) -> str | None:
    return first_sentence(description)


TAGLINE_RULES: Sequence[tuple[str, TaglineRule]] = (
    ("hero", _hero_text),
    ("og:description", _og_description),
    ("twitter:description", _twitter_description),
    ("h1", _first_h1),
    ("description", _description_sentence),
)


def extract_tagline(
    document: MarkupDocument,
    description: str = "",
    rules: Sequence[tuple[str, TaglineRule]] = TAGLINE_RULES,
) -> str:
    """Return the tagline from the first rule that yields text.

    Args:
        document: Parsed page
        description: Page description, used by the last-resort rule
        rules: Ordered (name, rule) pairs

    Returns:
        Tagline text, or "" when nothing qualifies
    """
    for _name, rule in rules:
        text = rule(document, description)
        if text:
            return text
    return ""
