"""Brand analysis endpoint.

The handler validates presence of the URL, delegates to BrandAnalyzer and
maps pipeline error kinds onto HTTP status codes:

- InvalidURLError       -> 400
- AccessBlockedError    -> 403
- HostUnreachableError  -> 404
- FetchTimeoutError     -> 408
- FetchFailedError      -> 500
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from brand_analyzer.config import get_settings
from brand_analyzer.models.brand_models import AnalyzeRequest
from brand_analyzer.services.analyzer import BrandAnalyzer
from brand_analyzer.services.errors import (
    AccessBlockedError,
    BrandAnalysisError,
    FetchTimeoutError,
    HostUnreachableError,
    InvalidURLError,
)
from brand_analyzer.services.page_fetcher import HttpxPageFetcher
from brand_analyzer.services.result_cache import AnalysisCache

logger = logging.getLogger(__name__)
router = APIRouter()

# (error type, status code, user-facing message), most specific first
ERROR_RESPONSES: tuple[tuple[type[BrandAnalysisError], int, str], ...] = (
    (InvalidURLError, 400, "Invalid URL, please include a valid domain."),
    (
        AccessBlockedError,
        403,
        "Site blocked automated access (403/401). Try a different URL.",
    ),
    (
        HostUnreachableError,
        404,
        "Could not reach the website. Check the URL and try again.",
    ),
    (
        FetchTimeoutError,
        408,
        "Request timed out. The site may be too slow or blocking bots.",
    ),
)


def get_analysis_cache(request: Request) -> AnalysisCache:
    """Return the app-wide cache, creating it on first use."""
    cache = getattr(request.app.state, "analysis_cache", None)
    if cache is None:
        settings = get_settings()
        cache = AnalysisCache(
            ttl_seconds=settings.result_cache_ttl_seconds,
            max_entries=settings.result_cache_max_entries,
        )
        request.app.state.analysis_cache = cache
    return cache


def get_brand_analyzer(
    cache: AnalysisCache = Depends(get_analysis_cache),
) -> BrandAnalyzer:
    """Build a BrandAnalyzer from settings and the shared cache."""
    settings = get_settings()
    fetcher = HttpxPageFetcher(
        timeout=settings.page_fetch_timeout_seconds,
        stylesheet_timeout=settings.stylesheet_fetch_timeout_seconds,
        max_redirects=settings.max_redirects,
        user_agent=settings.user_agent,
    )
    return BrandAnalyzer(
        cache=cache, fetcher=fetcher, max_stylesheets=settings.max_stylesheets
    )


def error_response(error: BrandAnalysisError) -> JSONResponse:
    """Map a pipeline error to its HTTP response."""
    for error_type, status_code, message in ERROR_RESPONSES:
        if isinstance(error, error_type):
            return JSONResponse(status_code=status_code, content={"error": message})
    return JSONResponse(
        status_code=500,
        content={"error": f"Failed to analyze site. {error}"},
    )


@router.post("/analyze")
async def analyze(
    body: AnalyzeRequest | None = None,
    analyzer: BrandAnalyzer = Depends(get_brand_analyzer),
):
    """Analyze the brand identity of a public web page."""
    raw_url = body.url if body is not None else None
    if not raw_url or not raw_url.strip():
        return JSONResponse(status_code=400, content={"error": "URL is required"})

    try:
        result = await analyzer.analyze(raw_url)
    except BrandAnalysisError as e:
        logger.warning("Analysis failed for %s: %s", raw_url, e)
        return error_response(e)

    return result.to_wire()
