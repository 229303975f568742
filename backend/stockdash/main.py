"""FastAPI application factory."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.routes import create_api_router
from .config import Settings
from .errors import StockDashError
from .service import DashboardService
from .streaming.stream import create_stream_router

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Console logging for the server process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )
    # Per-request access lines drown out the feed logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def create_app(
    settings: Settings | None = None,
    service: DashboardService | None = None,
) -> FastAPI:
    """Build the app. A prebuilt ``service`` may be injected (tests do this).

    The price feed runs only while the app's lifespan is active.
    """
    if service is None:
        service = DashboardService(settings or Settings())
    settings = service.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await service.start()
        try:
            yield
        finally:
            await service.stop()

    app = FastAPI(title="StockDash", lifespan=lifespan)
    app.state.service = service

    @app.exception_handler(StockDashError)
    async def handle_domain_error(request: Request, exc: StockDashError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Malformed request"})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    app.include_router(create_api_router(service))
    app.include_router(create_stream_router(service))

    # Mounted last so API routes take precedence
    if settings.static_dir and os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        logger.warning("Static directory not found, serving API only: %s", settings.static_dir)

    return app
