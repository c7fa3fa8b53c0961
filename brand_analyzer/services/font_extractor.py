"""Font family discovery from Google Fonts links and CSS text."""

import re
import time
from typing import Iterable, List
from urllib.parse import unquote_plus

import logfire

from brand_analyzer.constants import (
    FONT_NAME_MAX_CHARS,
    FONT_NAME_MIN_CHARS,
    FONT_SAMPLE_TEXT,
    GENERIC_FONT_KEYWORDS,
    MAX_EXTERNAL_STYLESHEETS,
    MAX_FONTS,
    SYSTEM_DEFAULT_FONT_NAME,
)
from brand_analyzer.models.brand_models import FontCategory, FontEntry
from brand_analyzer.services.markup import MarkupDocument, attr_text
from brand_analyzer.services.page_fetcher import PageFetcher

GOOGLE_FONTS_HOST = "fonts.googleapis.com"

_GOOGLE_FONTS_IMPORT = re.compile(r"fonts\.googleapis\.com/css[^'\"\s)]+")
_FAMILY_PARAM = re.compile(r"family=([^&'\"\s);]+)")

_FONT_FACE = re.compile(
    r"@font-face\s*\{[^}]*?font-family\s*:\s*['\"]?([^;'\"}]+)['\"]?",
    re.IGNORECASE,
)
_FONT_FAMILY_DECLARATION = re.compile(r"font-family\s*:\s*([^;}{]+)", re.IGNORECASE)
_FONT_VARIABLE = re.compile(
    r"--[\w-]*font[\w-]*\s*:\s*['\"]?([A-Za-z][^;'\"}]+)['\"]?",
    re.IGNORECASE,
)
_IMPORTANT = re.compile(r"\s*!important\s*", re.IGNORECASE)

_MONOSPACE = re.compile(
    r"mono|code|console|courier|fira|jetbrains|hack|source code", re.IGNORECASE
)
_SERIF = re.compile(r"serif(?!less)", re.IGNORECASE)
_SERIF_FAMILIES = re.compile(
    r"garamond|georgia|times|playfair|merriweather|lora", re.IGNORECASE
)

SYSTEM_DEFAULT_FONT = FontEntry(
    name=SYSTEM_DEFAULT_FONT_NAME, category="Sans-Serif", sample=FONT_SAMPLE_TEXT
)


def _clean(raw: str) -> str:
    return _IMPORTANT.sub("", raw.replace('"', "").replace("'", "")).strip()


def _within_length(name: str) -> bool:
    return FONT_NAME_MIN_CHARS < len(name) < FONT_NAME_MAX_CHARS


def google_font_families(href: str) -> List[str]:
    """Families named in a Google Fonts URL.

    Handles both css?family=Roboto:400,700|Open+Sans and
    css2?family=Inter:wght@400&family=Lora.
    """
    families = []
    for value in _FAMILY_PARAM.findall(href):
        for entry in unquote_plus(value).split("|"):
            name = entry.split(":")[0].strip()
            if name:
                families.append(name)
    return families


def scan_css_fonts(css_text: str) -> List[str]:
    """Font names from @font-face rules, font-family declarations and
    font custom properties, in that order (duplicates kept)."""
    if not css_text:
        return []
    names: List[str] = []

    for match in _FONT_FACE.finditer(css_text):
        name = _clean(match.group(1))
        if name:
            names.append(name)

    for match in _FONT_FAMILY_DECLARATION.finditer(css_text):
        for family in match.group(1).split(","):
            name = _clean(family)
            if name.lower() in GENERIC_FONT_KEYWORDS or name.lower().startswith("var("):
                continue
            if _within_length(name):
                names.append(name)

    for match in _FONT_VARIABLE.finditer(css_text):
        name = _clean(match.group(1))
        if _within_length(name):
            names.append(name)

    return names


def classify_font(name: str) -> FontCategory:
    """Monospace, Serif or Sans-Serif (the default) by family-name pattern."""
    if _MONOSPACE.search(name):
        return "Monospace"
    if _SERIF.search(name) or _SERIF_FAMILIES.search(name):
        return "Serif"
    return "Sans-Serif"


def build_font_entries(names: Iterable[str], limit: int = MAX_FONTS) -> List[FontEntry]:
    """Deduplicate names (exact match, first sighting wins), cap, classify."""
    distinct = list(dict.fromkeys(names))[:limit]
    return [
        FontEntry(name=name, category=classify_font(name), sample=FONT_SAMPLE_TEXT)
        for name in distinct
    ]


class FontExtractor:
    """Collect font families from the page and its linked stylesheets."""

    def __init__(
        self,
        fetcher: PageFetcher,
        max_stylesheets: int = MAX_EXTERNAL_STYLESHEETS,
    ):
        self._fetcher = fetcher
        self._max_stylesheets = max_stylesheets

    def inline_font_names(self, document: MarkupDocument) -> List[str]:
        """Names from Google Fonts links, @imports and <style> blocks."""
        names: List[str] = []
        for link in document.links_with_href_containing(GOOGLE_FONTS_HOST):
            names.extend(google_font_families(attr_text(link, "href")))

        styles = document.style_blocks()
        for css in styles:
            for href in _GOOGLE_FONTS_IMPORT.findall(css):
                names.extend(google_font_families(href))
        for css in styles:
            names.extend(scan_css_fonts(css))
        return names

    async def extract(self, document: MarkupDocument) -> List[FontEntry]:
        """Return up to six distinct fonts in discovery order.

        Stylesheet failures contribute nothing and never raise.
        """
        start_time = time.time()
        names = self.inline_font_names(document)

        sheet_urls = document.stylesheet_urls(limit=self._max_stylesheets)
        for css in await self._fetcher.fetch_stylesheets(sheet_urls):
            names.extend(scan_css_fonts(css))

        fonts = build_font_entries(names)
        logfire.info(
            "Fonts extracted",
            url=document.url.href,
            stylesheet_count=len(sheet_urls),
            candidate_count=len(names),
            font_count=len(fonts),
            total_time_ms=(time.time() - start_time) * 1000,
        )
        return fonts
