"""FastAPI application initialization."""

import os
from contextlib import asynccontextmanager

import logfire
import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.fastapi import FastApiIntegration

from brand_analyzer.api import analyze, health
from brand_analyzer.config import get_settings
from brand_analyzer.logging_config import setup_logfire
from brand_analyzer.services.result_cache import AnalysisCache

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    settings = get_settings()

    # Initialize Logfire for observability
    setup_logfire(app)

    # Initialize Sentry if DSN is provided
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            environment=settings.env,
            integrations=[FastApiIntegration()],
        )

    # Result cache lives for the process; not durable across restarts
    app.state.analysis_cache = AnalysisCache(
        ttl_seconds=settings.result_cache_ttl_seconds,
        max_entries=settings.result_cache_max_entries,
    )

    logfire.info(
        "Application startup complete",
        environment=settings.env,
        cache_ttl_seconds=settings.result_cache_ttl_seconds,
        max_stylesheets=settings.max_stylesheets,
    )

    yield

    logfire.info(
        "Application shutdown complete",
        cached_results=len(app.state.analysis_cache),
    )


# Create FastAPI app
app = FastAPI(
    title="Brand Identity Analyzer",
    description="Extracts logo, tagline, colors, fonts and metadata from public web pages",
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health.router, tags=["health"])
app.include_router(analyze.router, prefix="/api", tags=["analyze"])


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Brand Identity Analyzer API",
        "version": APP_VERSION,
    }


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        "brand_analyzer.main:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("ENV") == "local",
    )


if __name__ == "__main__":
    run()
