"""Shared pytest fixtures and configuration.

Fixture Categories:
1. HTTP: respx_mock
2. Pipeline doubles: StubFetcher, stub_fetcher, make_document, make_result
3. Sample markup: brand_html
4. Infrastructure: mock_settings, mock_logfire, test_client
"""

import asyncio
import os
from datetime import datetime, timezone
from typing import Sequence
from unittest.mock import MagicMock, Mock

import pytest

# Suppress Logfire "not configured" warnings for modules that log at import/use
os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")

import respx

from brand_analyzer.models.brand_models import AnalysisResult, FontEntry
from brand_analyzer.services.markup import MarkupDocument


@pytest.fixture
def respx_mock():
    """Respx mock fixture for HTTP mocking."""
    with respx.mock:
        yield respx


# =============================================================================
# Pipeline doubles
# =============================================================================


class StubFetcher:
    """In-memory PageFetcher.

    Serves page_html for any page URL (or raises page_error) and looks up
    stylesheets by URL, returning "" for unknown ones like a failed fetch.
    """

    def __init__(
        self,
        page_html: str = "",
        stylesheets: dict[str, str] | None = None,
        page_error: Exception | None = None,
    ):
        self.page_html = page_html
        self.stylesheets = stylesheets or {}
        self.page_error = page_error
        self.page_calls: list[str] = []
        self.stylesheet_calls: list[str] = []

    async def fetch_page(self, url: str) -> str:
        self.page_calls.append(url)
        if self.page_error is not None:
            raise self.page_error
        return self.page_html

    async def fetch_stylesheet(self, url: str) -> str:
        self.stylesheet_calls.append(url)
        return self.stylesheets.get(url, "")

    async def fetch_stylesheets(self, urls: Sequence[str]) -> list[str]:
        return list(await asyncio.gather(*(self.fetch_stylesheet(url) for url in urls)))


@pytest.fixture
def stub_fetcher():
    """Factory for StubFetcher instances."""
    return StubFetcher


@pytest.fixture
def make_document():
    """Factory: parse HTML as if fetched from url."""

    def _make(html: str, url: str = "https://example.com/") -> MarkupDocument:
        return MarkupDocument(html, url)

    return _make


@pytest.fixture
def make_result():
    """Factory for minimal AnalysisResult records."""

    def _make(url: str = "https://example.com/", **overrides) -> AnalysisResult:
        fields = dict(
            url=url,
            site_name="example.com",
            title="Example",
            description="An example site.",
            tagline="An example site",
            logo=None,
            fonts=[FontEntry(name="Inter", category="Sans-Serif")],
            colors=[],
            scraped_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )
        fields.update(overrides)
        return AnalysisResult(**fields)

    return _make


@pytest.fixture
def brand_html():
    """A page carrying every kind of brand signal."""
    return """
    <html>
    <head>
        <title>Acme Rockets | Home</title>
        <meta property="og:title" content="Acme Rockets">
        <meta property="og:site_name" content="Acme">
        <meta property="og:image" content="/img/og-card.png">
        <meta name="description" content="Rockets for everyone. Built in the desert.">
        <link rel="apple-touch-icon" href="/apple-touch-icon.png">
        <link rel="icon" href="/favicon.png">
        <link rel="stylesheet" href="/css/main.css">
        <link href="https://fonts.googleapis.com/css?family=Roboto:400,700|Open+Sans" rel="stylesheet">
        <style>
            :root { --brand-color: #E4572E; --text-muted: #6B7280; }
            .btn { background-color: #E4572E; }
            body { font-family: "Inter", sans-serif; color: #111111; }
        </style>
    </head>
    <body>
        <header><img src="/img/acme-logo.svg" alt="Acme"></header>
        <section class="hero"><h1>Reach orbit faster</h1></section>
    </body>
    </html>
    """


# =============================================================================
# Infrastructure
# =============================================================================


@pytest.fixture
def mock_settings(monkeypatch):
    """Mock application settings."""
    from brand_analyzer.config import Settings

    settings = Settings(
        env="local",
        logfire_token=None,
        sentry_dsn=None,
    )

    monkeypatch.setattr("brand_analyzer.config.get_settings", lambda: settings)
    # Patch where get_settings is used so request handlers see the mock
    monkeypatch.setattr("brand_analyzer.main.get_settings", lambda: settings)
    monkeypatch.setattr("brand_analyzer.logging_config.get_settings", lambda: settings)
    monkeypatch.setattr("brand_analyzer.api.analyze.get_settings", lambda: settings)
    monkeypatch.setattr("brand_analyzer.cli.analyze_cli.get_settings", lambda: settings)
    return settings


@pytest.fixture
def mock_logfire(monkeypatch):
    """
    Mock Logfire for testing without actual logging.

    Patches the module-level logfire import of every module that logs.
    """
    mock_logfire_module = MagicMock()
    mock_logfire_module.info = Mock()
    mock_logfire_module.warning = Mock()
    mock_logfire_module.debug = Mock()
    mock_logfire_module.configure = Mock()
    mock_logfire_module.instrument_fastapi = Mock()
    mock_logfire_module.instrument_pydantic = Mock()
    mock_logfire_module.instrument_httpx = Mock()

    for module in (
        "brand_analyzer.services.page_fetcher",
        "brand_analyzer.services.logo_extractor",
        "brand_analyzer.services.font_extractor",
        "brand_analyzer.services.color_extractor",
        "brand_analyzer.services.result_cache",
        "brand_analyzer.services.analyzer",
        "brand_analyzer.logging_config",
        "brand_analyzer.main",
    ):
        monkeypatch.setattr(f"{module}.logfire", mock_logfire_module)

    return mock_logfire_module


@pytest.fixture
def test_client(mock_settings, mock_logfire):
    """FastAPI TestClient for E2E tests with a fresh result cache."""
    from fastapi.testclient import TestClient

    from brand_analyzer.main import app
    from brand_analyzer.services.result_cache import AnalysisCache

    app.state.analysis_cache = AnalysisCache()
    yield TestClient(app)
    app.dependency_overrides.clear()
