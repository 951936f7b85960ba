"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from love_days.api.music import router as music_router
from love_days.api.photos import router as photos_router
from love_days.api.settings import router as settings_router
from love_days.app_logging import configure_logging
from love_days.containers import AppContainer
from love_days.errors import AssetTooLarge, ValidationError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title=container.settings.site_name)
    app.state.container = container

    app.include_router(settings_router)
    app.include_router(photos_router)
    app.include_router(music_router)
    app.mount(
        container.settings.uploads_url_prefix,
        StaticFiles(directory=container.settings.uploads_dir, check_dir=False),
        name="uploads",
    )

    @app.exception_handler(AssetTooLarge)
    async def asset_too_large(request: Request, exc: AssetTooLarge) -> JSONResponse:
        logger.info("Rejected oversized upload", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content={"error": str(exc)},
        )

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/stats")
    async def stats(request: Request) -> dict[str, int]:
        """Return counts and time elapsed since the anniversary."""
        state_container: AppContainer = request.app.state.container
        snapshot = state_container.stats_service.snapshot()
        return {
            "photoCount": snapshot.photo_count,
            "songCount": snapshot.song_count,
            "days": snapshot.days,
            "hours": snapshot.hours,
        }

    return app
