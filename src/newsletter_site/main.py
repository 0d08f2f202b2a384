"""
FastAPI application entry point.

Run with ``python -m newsletter_site`` or
``uvicorn newsletter_site.main:app``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI

from newsletter_site.config import Settings, get_settings
from newsletter_site.email.factory import create_email_provider
from newsletter_site.email.interface import EmailProvider
from newsletter_site.server import AbortingH11Protocol
from newsletter_site.shared.body_limit import BodyLimitMiddleware
from newsletter_site.shared.logging import CorrelationIdMiddleware, get_logger, setup_logging
from newsletter_site.static.router import router as static_router
from newsletter_site.subscriptions.router import router as subscriptions_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    logger.info(
        f"Server running on http://localhost:{settings.port}",
        extra={
            "env": settings.app_env,
            "content_root": str(settings.content_root),
            "email_configured": settings.has_email_credentials,
        },
    )

    yield

    logger.info("Shutting down application")
    await app.state.email_provider.aclose()
    logger.info("Application shutdown complete")


def create_fastapi_app(
    settings: Settings | None = None,
    email_provider: EmailProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application (without the body cap)."""
    settings = settings or get_settings()

    app = FastAPI(
        title="newsletter-site",
        description="Static site server with a newsletter signup endpoint",
        version="0.1.0",
        lifespan=lifespan,
        # every path outside /api/subscribe belongs to the static resolver
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings
    app.state.email_provider = email_provider or create_email_provider(settings)

    app.add_middleware(CorrelationIdMiddleware)

    # Order matters: the static catch-all must come last.
    app.include_router(subscriptions_router)
    app.include_router(static_router)

    return app


def create_app(
    settings: Settings | None = None,
    email_provider: EmailProvider | None = None,
) -> BodyLimitMiddleware:
    """Build the ASGI application served by uvicorn."""
    settings = settings or get_settings()
    fastapi_app = create_fastapi_app(settings, email_provider)
    return BodyLimitMiddleware(fastapi_app, max_body_bytes=settings.max_body_bytes)


app = create_app()


def run() -> None:
    """Start uvicorn with the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "newsletter_site.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        http=AbortingH11Protocol,
    )
