"""Tests for BrandAnalyzer orchestration."""

import asyncio

import httpx
import pytest

from brand_analyzer.services.analyzer import BrandAnalyzer, analyze_brand
from brand_analyzer.services.errors import (
    AccessBlockedError,
    HostUnreachableError,
    InvalidURLError,
)
from brand_analyzer.services.result_cache import AnalysisCache


class TestBrandAnalyzer:
    """Test BrandAnalyzer.analyze()."""

    @pytest.mark.asyncio
    async def test_full_pipeline_on_rich_page(self, brand_html, stub_fetcher):
        fetcher = stub_fetcher(
            page_html=brand_html,
            stylesheets={
                "https://acme.com/css/main.css": "h2 { font-family: Lora; color: #336699; }"
            },
        )
        analyzer = BrandAnalyzer(cache=AnalysisCache(), fetcher=fetcher)

        result = await analyzer.analyze("acme.com")

        assert result.url == "https://acme.com/"
        assert result.site_name == "Acme"
        assert result.title == "Acme Rockets"
        assert result.description == "Rockets for everyone. Built in the desert."
        assert result.tagline == "Reach orbit faster"
        assert result.logo.source == "og:image"
        assert result.logo.url == "https://acme.com/img/og-card.png"
        assert [f.name for f in result.fonts] == ["Roboto", "Open Sans", "Inter", "Lora"]
        assert [c.hex for c in result.colors] == ["#E4572E", "#6B7280", "#336699"]
        assert result.cached is False
        assert result.scraped_at.tzinfo is not None
        assert fetcher.page_calls == ["https://acme.com/"]

    @pytest.mark.asyncio
    async def test_bare_page_gets_placeholders(self, stub_fetcher):
        analyzer = BrandAnalyzer(
            cache=AnalysisCache(), fetcher=stub_fetcher(page_html="<html></html>")
        )

        result = await analyzer.analyze("https://www.plain.org")

        assert result.site_name == "plain.org"
        assert result.title == ""
        assert result.description == "No description found."
        assert result.tagline == ""
        assert result.colors == ()
        assert len(result.fonts) == 1
        assert result.fonts[0].name == "System Default"
        assert result.fonts[0].category == "Sans-Serif"
        assert result.logo.url == "https://www.plain.org/favicon.ico"

    @pytest.mark.asyncio
    async def test_second_call_served_from_cache(self, brand_html, stub_fetcher):
        fetcher = stub_fetcher(page_html=brand_html)
        analyzer = BrandAnalyzer(cache=AnalysisCache(), fetcher=fetcher)

        first = await analyzer.analyze("https://acme.com")
        second = await analyzer.analyze("https://acme.com")

        assert len(fetcher.page_calls) == 1
        assert second.cached is True
        assert second.model_dump(exclude={"cached"}) == first.model_dump(exclude={"cached"})
        assert first.cached is False

    @pytest.mark.asyncio
    async def test_cache_hit_cannot_alter_stored_result(self, brand_html, stub_fetcher):
        analyzer = BrandAnalyzer(
            cache=AnalysisCache(), fetcher=stub_fetcher(page_html=brand_html)
        )

        await analyzer.analyze("acme.com")
        hit = await analyzer.analyze("acme.com")

        assert isinstance(hit.fonts, tuple)
        assert isinstance(hit.colors, tuple)
        with pytest.raises(AttributeError):
            hit.fonts.append(hit.fonts[0])

        again = await analyzer.analyze("acme.com")
        assert [f.name for f in again.fonts] == ["Roboto", "Open Sans", "Inter"]
        assert len(again.colors) == len(hit.colors)

    @pytest.mark.asyncio
    async def test_cache_keyed_by_normalized_url(self, stub_fetcher):
        fetcher = stub_fetcher(page_html="<title>x</title>")
        analyzer = BrandAnalyzer(cache=AnalysisCache(), fetcher=fetcher)

        await analyzer.analyze("acme.com")
        result = await analyzer.analyze("  HTTPS://ACME.com:443/ ")

        assert result.cached is True
        assert fetcher.page_calls == ["https://acme.com/"]

    @pytest.mark.asyncio
    async def test_expired_entry_triggers_fresh_fetch(self, stub_fetcher):
        fetcher = stub_fetcher(page_html="<title>x</title>")
        analyzer = BrandAnalyzer(cache=AnalysisCache(ttl_seconds=0), fetcher=fetcher)

        await analyzer.analyze("acme.com")
        result = await analyzer.analyze("acme.com")

        assert result.cached is False
        assert len(fetcher.page_calls) == 2

    @pytest.mark.asyncio
    async def test_invalid_url_fails_before_fetch(self, stub_fetcher):
        fetcher = stub_fetcher()
        analyzer = BrandAnalyzer(cache=AnalysisCache(), fetcher=fetcher)

        with pytest.raises(InvalidURLError):
            await analyzer.analyze("not a url")

        assert fetcher.page_calls == []

    @pytest.mark.asyncio
    async def test_fetch_error_propagates_and_is_not_cached(self, stub_fetcher):
        cache = AnalysisCache()
        fetcher = stub_fetcher(
            page_error=HostUnreachableError("down", url="https://acme.com/")
        )
        analyzer = BrandAnalyzer(cache=cache, fetcher=fetcher)

        with pytest.raises(HostUnreachableError):
            await analyzer.analyze("acme.com")

        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_font_and_color_extraction_run_concurrently(self, stub_fetcher):
        font_started = asyncio.Event()
        color_started = asyncio.Event()

        class RendezvousFonts:
            async def extract(self, document):
                font_started.set()
                await asyncio.wait_for(color_started.wait(), timeout=1)
                return []

        class RendezvousColors:
            async def extract(self, document):
                color_started.set()
                await asyncio.wait_for(font_started.wait(), timeout=1)
                return []

        analyzer = BrandAnalyzer(
            cache=AnalysisCache(),
            fetcher=stub_fetcher(page_html="<title>x</title>"),
            font_extractor=RendezvousFonts(),
            color_extractor=RendezvousColors(),
        )

        result = await analyzer.analyze("acme.com")

        assert result.title == "x"


class TestAnalyzerOverHttp:
    """Run the default httpx fetcher against mocked sites."""

    @pytest.mark.asyncio
    async def test_failing_stylesheet_degrades_gracefully(self, respx_mock):
        respx_mock.get("https://acme.com/").mock(
            return_value=httpx.Response(
                200,
                text="""
                <html><head>
                <title>Acme</title>
                <link rel="stylesheet" href="/ok.css">
                <link rel="stylesheet" href="/broken.css">
                </head><body><h1>Hello world</h1></body></html>
                """,
            )
        )
        respx_mock.get("https://acme.com/ok.css").mock(
            return_value=httpx.Response(
                200, text=":root{--brand:#2D6A4F} body{font-family:'Work Sans'}"
            )
        )
        respx_mock.get("https://acme.com/broken.css").mock(
            side_effect=httpx.ConnectError("refused")
        )

        result = await analyze_brand("acme.com")

        assert [c.hex for c in result.colors] == ["#2D6A4F"]
        assert [f.name for f in result.fonts] == ["Work Sans"]
        assert result.tagline == "Hello world"

    @pytest.mark.asyncio
    async def test_forbidden_page_raises_access_blocked(self, respx_mock):
        respx_mock.get("https://acme.com/").mock(return_value=httpx.Response(403))

        with pytest.raises(AccessBlockedError):
            await analyze_brand("acme.com")

    @pytest.mark.asyncio
    async def test_shared_cache_across_calls(self, respx_mock):
        route = respx_mock.get("https://acme.com/").mock(
            return_value=httpx.Response(200, text="<title>Acme</title>")
        )
        cache = AnalysisCache()

        await analyze_brand("acme.com", cache=cache)
        second = await analyze_brand("acme.com", cache=cache)

        assert second.cached is True
        assert route.call_count == 1
