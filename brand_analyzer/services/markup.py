"""Queryable view over a fetched HTML page.

MarkupDocument wraps a BeautifulSoup tree and exposes the handful of lookups
the extractors need (meta content, rel-exact links, selector text, style
blocks). Lookups return None or empty values when markup is missing; they
never raise on malformed HTML.
"""

from typing import List

from bs4 import BeautifulSoup, Tag

from brand_analyzer.services.url_normalizer import (
    NormalizedURL,
    normalize_url,
    resolve_url,
)


def attr_text(tag: Tag, name: str) -> str:
    """Return an attribute as text, joining multi-valued ones (class, rel)."""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


class MarkupDocument:
    """Parsed HTML for one analysis request."""

    def __init__(self, html: str, url: NormalizedURL | str):
        """Parse HTML fetched from url.

        Args:
            html: Raw HTML text (may be empty or malformed)
            url: The normalized request URL the HTML was fetched from
        """
        self.url = url if isinstance(url, NormalizedURL) else normalize_url(url)
        self.soup = BeautifulSoup(html or "", "html.parser")
        self.base_url = self._find_base_url()

    def _find_base_url(self) -> str:
        base = self.soup.find("base", href=True)
        if base is not None:
            resolved = resolve_url(self.url.href, attr_text(base, "href"))
            if resolved:
                return resolved
        return self.url.href

    def resolve(self, reference: str | None) -> str | None:
        """Resolve a reference found in the page against its base URL."""
        return resolve_url(self.base_url, reference)

    def meta_property(self, prop: str) -> str | None:
        """Content of the first <meta property=prop>, or None if blank."""
        return self._meta_content("property", prop)

    def meta_name(self, name: str) -> str | None:
        """Content of the first <meta name=name>, or None if blank."""
        return self._meta_content("name", name)

    def _meta_content(self, key: str, value: str) -> str | None:
        tag = self.soup.find("meta", attrs={key: value})
        if tag is None:
            return None
        content = attr_text(tag, "content").strip()
        return content or None

    def links_with_rel(self, rel: str) -> List[Tag]:
        """All <link> elements whose rel equals rel exactly (case-insensitive)."""
        wanted = rel.lower()
        return [
            link
            for link in self.soup.find_all("link")
            if attr_text(link, "rel").strip().lower() == wanted
        ]

    def links_with_href_containing(self, fragment: str) -> List[Tag]:
        """All <link> elements whose href contains fragment."""
        return [
            link
            for link in self.soup.find_all("link", href=True)
            if fragment in attr_text(link, "href")
        ]

    def first_text(self, selector: str) -> str:
        """Stripped text of the first element matching a CSS selector."""
        element = self.soup.select_one(selector)
        if element is None:
            return ""
        return element.get_text().strip()

    def title_text(self) -> str:
        """Stripped text of the first <title> element."""
        title = self.soup.find("title")
        return title.get_text().strip() if title is not None else ""

    def first_h1_text(self) -> str:
        h1 = self.soup.find("h1")
        return h1.get_text().strip() if h1 is not None else ""

    def images(self) -> List[Tag]:
        return self.soup.find_all("img")

    def inline_svgs(self) -> List[Tag]:
        return self.soup.find_all("svg")

    def style_blocks(self) -> List[str]:
        """Text of every inline <style> block, in document order."""
        return [style.get_text() for style in self.soup.find_all("style")]

    def stylesheet_urls(self, limit: int | None = None) -> List[str]:
        """Resolved hrefs of <link rel="stylesheet">, unresolvable ones dropped.

        Args:
            limit: Keep at most this many URLs (in document order)
        """
        urls = []
        for link in self.links_with_rel("stylesheet"):
            resolved = self.resolve(attr_text(link, "href"))
            if resolved:
                urls.append(resolved)
        return urls if limit is None else urls[:limit]
