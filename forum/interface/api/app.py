"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forum.config import Settings
from forum.interface.api.routes import (
    comments,
    feed,
    health,
    notifications,
    posts,
    summaries,
    votes,
)
from forum.util.di.container import create_container, setup_di
from forum.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container, the production container if omitted
    """
    settings = Settings()
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # Cancels in-flight summary generation and live subscriptions
        await container.close()

    app_instance = FastAPI(
        title="Forum Engine API",
        description="Votes, notifications, cached summaries and live feeds for a community forum",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "Cache-Control",
            "Last-Event-ID",
            "X-User-Id",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(summaries.router)
    app_instance.include_router(notifications.router)
    app_instance.include_router(feed.router)

    return app_instance
