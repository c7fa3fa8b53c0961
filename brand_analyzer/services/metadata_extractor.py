"""Title, description and site name extraction."""

from typing import Callable, Sequence

from brand_analyzer.models.brand_models import SiteMetadata
from brand_analyzer.services.markup import MarkupDocument

Getter = Callable[[MarkupDocument], str | None]

TITLE_SOURCES: Sequence[Getter] = (
    lambda doc: doc.meta_property("og:title"),
    lambda doc: doc.title_text(),
)

DESCRIPTION_SOURCES: Sequence[Getter] = (
    lambda doc: doc.meta_name("description"),
    lambda doc: doc.meta_property("og:description"),
    lambda doc: doc.meta_name("twitter:description"),
)

SITE_NAME_SOURCES: Sequence[Getter] = (
    lambda doc: doc.meta_property("og:site_name"),
    lambda doc: site_name_from_host(doc.url.host),
)


def site_name_from_host(host: str) -> str:
    """Host without a leading "www." (e.g. www.acme.com -> acme.com)."""
    return host[4:] if host.startswith("www.") else host


def first_value(document: MarkupDocument, sources: Sequence[Getter]) -> str:
    """Evaluate getters in order and return the first non-blank value."""
    for source in sources:
        value = source(document)
        if value and value.strip():
            return value.strip()
    return ""


def extract_metadata(document: MarkupDocument) -> SiteMetadata:
    """Extract title, description and site name; each independently optional."""
    return SiteMetadata(
        title=first_value(document, TITLE_SOURCES),
        description=first_value(document, DESCRIPTION_SOURCES),
        site_name=first_value(document, SITE_NAME_SOURCES),
    )
