"""FastAPI application for the tileraster web interface."""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tileraster import __version__
from tileraster.config import get_config
from tileraster.utils.logging import configure_logging, get_logger

from .routes import health, pyramid, raster

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    config = get_config()
    configure_logging(
        level=config.logging.level,
        format_type=config.logging.format,
        log_file=config.logging.file,
    )
    root = config.root
    logger.info(
        "Starting tileraster web API",
        root=(root.ullon, root.ullat, root.lrlon, root.lrlat),
        max_depth=root.max_depth,
    )
    yield
    logger.info("Shutting down tileraster web API")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    config = get_config()

    app = FastAPI(
        title="tileraster API",
        description="Quadtree tile selection for rastering map viewports",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        logger.debug(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_s=round(time.time() - start_time, 4),
        )
        return response

    app.include_router(raster.router, prefix="/api/v1", tags=["raster"])
    app.include_router(pyramid.router, prefix="/api/v1", tags=["pyramid"])
    app.include_router(health.router, tags=["health"])

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Global exception handler."""
        logger.exception("Unhandled exception", path=request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc)},
        )

    return app


# Create app instance
app = create_app()
