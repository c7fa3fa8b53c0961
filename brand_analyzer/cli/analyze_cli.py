"""Typer-based command line entry point for one-off analyses."""

import os

os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")

import asyncio
import json

import typer

from brand_analyzer.config import get_settings
from brand_analyzer.logging_config import configure_logging
from brand_analyzer.services.analyzer import BrandAnalyzer
from brand_analyzer.services.errors import BrandAnalysisError
from brand_analyzer.services.page_fetcher import HttpxPageFetcher
from brand_analyzer.services.result_cache import AnalysisCache

app = typer.Typer(help="Extract brand identity signals from a public web page.")


def build_analyzer() -> BrandAnalyzer:
    """Build an analyzer from settings with a process-local cache."""
    settings = get_settings()
    fetcher = HttpxPageFetcher(
        timeout=settings.page_fetch_timeout_seconds,
        stylesheet_timeout=settings.stylesheet_fetch_timeout_seconds,
        max_redirects=settings.max_redirects,
        user_agent=settings.user_agent,
    )
    cache = AnalysisCache(
        ttl_seconds=settings.result_cache_ttl_seconds,
        max_entries=settings.result_cache_max_entries,
    )
    return BrandAnalyzer(
        cache=cache, fetcher=fetcher, max_stylesheets=settings.max_stylesheets
    )


@app.command()
def analyze(
    url: str = typer.Argument(..., help="Page to analyze, e.g. example.com"),
    pretty: bool = typer.Option(True, "--pretty/--compact", help="Indent JSON output"),
):
    """Analyze URL and print the result as JSON."""
    configure_logging()
    analyzer = build_analyzer()
    try:
        result = asyncio.run(analyzer.analyze(url))
    except BrandAnalysisError as e:
        typer.echo(f"✗ {e}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps(result.to_wire(), indent=2 if pretty else None))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
