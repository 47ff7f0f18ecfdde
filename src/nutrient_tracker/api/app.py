"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from nutrient_tracker.api.capture import router as capture_router
from nutrient_tracker.api.errors import register_error_handlers
from nutrient_tracker.api.intake import router as intake_router
from nutrient_tracker.api.nutrients import router as nutrients_router
from nutrient_tracker.app_logging import configure_logging
from nutrient_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    register_error_handlers(app)
    app.include_router(nutrients_router)
    app.include_router(capture_router)
    app.include_router(intake_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
