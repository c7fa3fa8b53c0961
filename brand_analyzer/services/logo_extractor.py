"""Logo discovery via ranked candidate rules.

Each rule contributes zero or more candidates at a fixed priority. Rules are
kept in a table so their order can be read (and tested) at a glance; the
lowest-priority candidate that carries a URL wins.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List

import logfire

from brand_analyzer.constants import (
    LOGO_PRIORITY_APPLE_TOUCH_ICON,
    LOGO_PRIORITY_FAVICON,
    LOGO_PRIORITY_FAVICON_FALLBACK,
    LOGO_PRIORITY_IMG,
    LOGO_PRIORITY_INLINE_SVG,
    LOGO_PRIORITY_OG_IMAGE,
    LOGO_PRIORITY_TWITTER_IMAGE,
)
from brand_analyzer.models.brand_models import LogoCandidate
from brand_analyzer.services.markup import MarkupDocument, attr_text

# Sentinel for rules that flag a logo without a fetchable asset
NO_ASSET = object()


@dataclass(frozen=True)
class LogoRule:
    """A named source of logo references at one priority."""

    source: str
    priority: int
    collect: Callable[[MarkupDocument], Iterable[object]]


def _og_image(doc: MarkupDocument) -> Iterable[object]:
    content = doc.meta_property("og:image")
    return [content] if content else []


def _twitter_image(doc: MarkupDocument) -> Iterable[object]:
    content = doc.meta_name("twitter:image")
    return [content] if content else []


def _apple_touch_icons(doc: MarkupDocument) -> Iterable[object]:
    return [
        attr_text(link, "href")
        for link in doc.links_with_rel("apple-touch-icon")
        if attr_text(link, "href")
    ]


def _logo_images(doc: MarkupDocument) -> Iterable[object]:
    found = []
    for img in doc.images():
        src = attr_text(img, "src")
        if not src:
            continue
        haystack = " ".join(
            (src, attr_text(img, "alt"), attr_text(img, "class"), attr_text(img, "id"))
        )
        if "logo" in haystack.lower():
            found.append(src)
    return found


def _logo_svgs(doc: MarkupDocument) -> Iterable[object]:
    return [
        NO_ASSET
        for svg in doc.inline_svgs()
        if "logo" in attr_text(svg, "class").lower()
    ]


def _favicon(doc: MarkupDocument) -> Iterable[object]:
    for rel in ("icon", "shortcut icon"):
        links = doc.links_with_rel(rel)
        if links and attr_text(links[0], "href"):
            return [attr_text(links[0], "href")]
    return []


def _favicon_fallback(doc: MarkupDocument) -> Iterable[object]:
    return [f"{doc.url.origin}/favicon.ico"]


LOGO_RULES: tuple[LogoRule, ...] = (
    LogoRule("og:image", LOGO_PRIORITY_OG_IMAGE, _og_image),
    LogoRule("twitter:image", LOGO_PRIORITY_TWITTER_IMAGE, _twitter_image),
    LogoRule("apple-touch-icon", LOGO_PRIORITY_APPLE_TOUCH_ICON, _apple_touch_icons),
    LogoRule("img[logo]", LOGO_PRIORITY_IMG, _logo_images),
    LogoRule("inline-svg", LOGO_PRIORITY_INLINE_SVG, _logo_svgs),
    LogoRule("favicon", LOGO_PRIORITY_FAVICON, _favicon),
    LogoRule("favicon-fallback", LOGO_PRIORITY_FAVICON_FALLBACK, _favicon_fallback),
)


def collect_logo_candidates(
    document: MarkupDocument, rules: Iterable[LogoRule] = LOGO_RULES
) -> List[LogoCandidate]:
    """Build every logo candidate, sorted by ascending priority.

    References that cannot be resolved against the page base are dropped.
    """
    candidates: List[LogoCandidate] = []
    for rule in rules:
        for reference in rule.collect(document):
            if reference is NO_ASSET:
                url = None
            else:
                url = document.resolve(reference)
                if url is None:
                    continue
            candidates.append(
                LogoCandidate(url=url, source=rule.source, priority=rule.priority)
            )
    return sorted(candidates, key=lambda c: c.priority)


def extract_logo(document: MarkupDocument) -> LogoCandidate | None:
    """Pick the highest-preference logo candidate that has a URL."""
    candidates = collect_logo_candidates(document)
    best = next((c for c in candidates if c.url), None)
    logfire.debug(
        "Logo extracted",
        url=document.url.href,
        candidate_count=len(candidates),
        source=best.source if best else None,
    )
    return best
