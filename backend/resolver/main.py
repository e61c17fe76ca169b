"""FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.resolver.api.routes.health import router as health_router
from backend.resolver.api.routes.metrics import router as metrics_router
from backend.resolver.api.routes.places import router as places_router
from backend.resolver.config import get_settings
from backend.resolver.orchestration.resolver import PlaceResolver
from backend.resolver.utils.logging import StructuredResolverLogger
from backend.resolver.utils.metrics import PrometheusResolverMetrics

logger = logging.getLogger(__name__)


def create_app(resolver: PlaceResolver | None = None) -> FastAPI:
    """Build the application.

    Args:
        resolver: Pre-built resolver (tests); by default one is wired from
            settings when the app starts
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        instance = resolver or PlaceResolver.from_settings(
            get_settings(),
            metrics=PrometheusResolverMetrics(),
            structured_logger=StructuredResolverLogger(),
        )
        await instance.open()
        logger.info("Place resolver started in %s mode", instance.mode.value)
        app.state.resolver = instance
        try:
            yield
        finally:
            await instance.aclose()

    app = FastAPI(title="Place Resolver API", version="0.1.0", lifespan=lifespan)

    # Register routes
    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(places_router, tags=["places"])

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Place Resolver API", "version": "0.1.0"}

    return app


app = create_app()
