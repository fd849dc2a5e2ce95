"""
FastAPI application for the CitizenAIR service.

This module initializes and configures the FastAPI application that serves
the crowdsourcing API endpoints.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from citizenair.config.settings import settings
from citizenair.api.endpoints import crowdsource
from citizenair.core.vocabulary import get_vocabulary
from citizenair.utils.db_session import get_async_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    Loads the word-cloud vocabulary once at startup so a broken vocabulary file
    fails the service immediately, and disposes the database engine on shutdown.
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    vocabulary = get_vocabulary(settings.WORDCLOUD_VOCABULARY_PATH)
    logger.info(
        "Word cloud vocabulary ready: %d keyword groups, %d stopwords",
        len(vocabulary.keyword_groups),
        len(vocabulary.stopwords),
    )

    yield

    logger.info("Shutting down application")
    await get_async_engine().dispose()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""CitizenAIR crowdsourcing API.

        This API provides endpoints for:
        - Submitting community ideas for a district
        - Listing a district's ideas together with their word cloud
        - Summarising idea counts per district
        - Building a word cloud from ad-hoc texts
        - Health monitoring""",
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_tags=[
            {
                "name": "crowdsource",
                "description": "District ideas and word clouds"
            },
            {
                "name": "health",
                "description": "Health check and monitoring"
            }
        ]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS if not settings.DEBUG else ["*"],
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.ALLOWED_HOSTS if not settings.DEBUG else ["*"]
    )

    app.include_router(
        crowdsource.router,
        prefix="/api/crowdsource",
        tags=["crowdsource"]
    )

    @app.get("/health", tags=["health"], summary="Health Check", description="Get application health status")
    async def health_check():
        """
        Health check endpoint.

        Returns:
            dict: Service status, version information and timestamp.
        """
        return {
            "status": "healthy",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "debug_mode": settings.DEBUG,
        }

    return app


# Create the application instance
app = create_app()
