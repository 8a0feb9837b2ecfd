"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from urlsum.config import Settings
from urlsum.interface.api.routes import content, health
from urlsum.interface.error import register_error_handlers
from urlsum.util.di.container import create_container, setup_di
from urlsum.util.observability import instrument_fastapi, instrument_httpx


def create_app(
    container: AsyncContainer | None = None, instrument: bool = True
) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function; in production
    start_app.py handles this.

    Args:
        container: DI container (the production container when omitted)
        instrument: Whether to install logfire instrumentation

    Returns:
        Configured application
    """
    settings = Settings()

    if instrument:
        instrument_httpx()

    app_instance = FastAPI(
        title="urlsum API",
        description="Turns Reddit posts and listings into plain-text transcripts for summarization",
        version=settings.version,
    )

    if instrument:
        instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Accept", "Content-Type", "Origin", "User-Agent"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(content.router)

    return app_instance
