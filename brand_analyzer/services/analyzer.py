"""Brand analysis orchestration.

BrandAnalyzer coordinates one analysis:
1. Normalize the URL and consult the result cache
2. Fetch and parse the page
3. Run font and color extraction concurrently (both fetch stylesheets)
4. Run metadata, logo and tagline extraction on the same document
5. Assemble, stamp and cache the result

Components (fetcher, cache, extractors) are injected for testing.
"""

import asyncio
import time
from datetime import datetime, timezone

import logfire

from brand_analyzer.constants import (
    MAX_EXTERNAL_STYLESHEETS,
    MISSING_DESCRIPTION_PLACEHOLDER,
)
from brand_analyzer.models.brand_models import AnalysisResult
from brand_analyzer.services.color_extractor import ColorExtractor
from brand_analyzer.services.font_extractor import SYSTEM_DEFAULT_FONT, FontExtractor
from brand_analyzer.services.logo_extractor import extract_logo
from brand_analyzer.services.markup import MarkupDocument
from brand_analyzer.services.metadata_extractor import extract_metadata
from brand_analyzer.services.page_fetcher import HttpxPageFetcher, PageFetcher
from brand_analyzer.services.result_cache import AnalysisCache
from brand_analyzer.services.tagline_extractor import extract_tagline, first_sentence
from brand_analyzer.services.url_normalizer import normalize_url


class BrandAnalyzer:
    """Run the extraction pipeline for a single URL."""

    def __init__(
        self,
        cache: AnalysisCache,
        fetcher: PageFetcher | None = None,
        font_extractor: FontExtractor | None = None,
        color_extractor: ColorExtractor | None = None,
        max_stylesheets: int = MAX_EXTERNAL_STYLESHEETS,
    ):
        """Initialize the analyzer.

        Args:
            cache: Result cache shared across analyses
            fetcher: Page fetcher implementation (defaults to HttpxPageFetcher)
            font_extractor: Defaults to FontExtractor over fetcher
            color_extractor: Defaults to ColorExtractor over fetcher
            max_stylesheets: Linked stylesheets scanned by default extractors
        """
        self._cache = cache
        self._fetcher = fetcher or HttpxPageFetcher()
        self._font_extractor = font_extractor or FontExtractor(
            self._fetcher, max_stylesheets=max_stylesheets
        )
        self._color_extractor = color_extractor or ColorExtractor(
            self._fetcher, max_stylesheets=max_stylesheets
        )

    async def analyze(self, raw_url: str) -> AnalysisResult:
        """Analyze a page and return its brand identity.

        Args:
            raw_url: Untrusted URL string

        Returns:
            AnalysisResult; cached=True when served from the cache

        Raises:
            InvalidURLError: If raw_url cannot be normalized
            FetchError: If the page itself cannot be fetched
        """
        normalized = normalize_url(raw_url)

        cached = self._cache.get(normalized.href)
        if cached is not None:
            logfire.info("Serving cached analysis", url=normalized.href)
            return cached.model_copy(update={"cached": True})

        start_time = time.time()
        logfire.info("Starting brand analysis", url=normalized.href)

        html = await self._fetcher.fetch_page(normalized.href)
        document = MarkupDocument(html, normalized)

        fonts, colors = await asyncio.gather(
            self._font_extractor.extract(document),
            self._color_extractor.extract(document),
        )
        metadata = extract_metadata(document)
        logo = extract_logo(document)
        tagline = extract_tagline(document, metadata.description)

        result = AnalysisResult(
            url=normalized.href,
            site_name=metadata.site_name,
            title=metadata.title,
            description=metadata.description or MISSING_DESCRIPTION_PLACEHOLDER,
            tagline=tagline or first_sentence(metadata.description),
            logo=logo,
            fonts=fonts or (SYSTEM_DEFAULT_FONT,),
            colors=colors,
            scraped_at=datetime.now(timezone.utc),
        )
        self._cache.set(normalized.href, result)

        logfire.info(
            "Brand analysis completed",
            url=normalized.href,
            logo_source=logo.source if logo else None,
            font_count=len(result.fonts),
            color_count=len(result.colors),
            has_tagline=bool(result.tagline),
            total_time_ms=(time.time() - start_time) * 1000,
        )
        return result


# =============================================================================
# Convenience function
# =============================================================================


async def analyze_brand(
    raw_url: str, cache: AnalysisCache | None = None
) -> AnalysisResult:
    """Analyze a URL with default components.

    Args:
        raw_url: URL to analyze
        cache: Optional shared cache (a fresh one is used otherwise)

    Returns:
        AnalysisResult
    """
    analyzer = BrandAnalyzer(cache=cache if cache is not None else AnalysisCache())
    return await analyzer.analyze(raw_url)
