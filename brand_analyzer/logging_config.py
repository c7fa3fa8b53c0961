"""Centralized logging configuration with Pydantic Logfire integration."""

import logging
from typing import Any

import logfire
from fastapi import FastAPI

from brand_analyzer.config import get_settings


def configure_logging() -> None:
    """
    Configure Logfire and Python logging without app instrumentation.

    Used directly by the CLI; setup_logfire() builds on it for the API.
    """
    settings = get_settings()

    logfire_config: dict[str, Any] = {
        "environment": settings.env,
        "service_name": "brand-analyzer",
    }

    # Without a token, events stay local (no cloud export)
    if settings.logfire_token:
        logfire_config["token"] = settings.logfire_token
    else:
        logfire_config["send_to_logfire"] = False

    logfire.configure(**logfire_config)

    log_level = settings.log_level.upper()

    if settings.env == "local":
        # Local: Console formatting for development
        logging.basicConfig(
            level=getattr(logging, log_level, logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        # Production: Logfire handles structured formatting
        logging.basicConfig(
            level=getattr(logging, log_level, logging.INFO),
            format="%(message)s",
        )


def setup_logfire(app: FastAPI) -> None:
    """
    Initialize and configure Pydantic Logfire for observability.

    Sets up:
    - FastAPI instrumentation (request/response tracing)
    - Pydantic instrumentation (model validation logging)
    - httpx instrumentation (page and stylesheet fetch spans)
    - Environment-aware Python logging
    """
    configure_logging()

    logfire.instrument_fastapi(app)
    logfire.instrument_pydantic()
    logfire.instrument_httpx()
