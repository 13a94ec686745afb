"""
FastAPI Application - Generative Media Gateway.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from admaker import __version__
from admaker.config import config
from admaker.ui import ui_router

from .dependencies import close_gateway
from .exceptions import APIError, api_error_handler, generic_exception_handler, request_validation_handler
from .routes import health_router, image_router, studio_router, video_router, voice_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan handler."""
    logger.info("=" * 60)
    logger.info("Starting Admaker API...")
    logger.info("=" * 60)

    config.log_status()

    yield

    await close_gateway()
    logger.info("Shutting down Admaker API...")


def create_app(debug: bool = False) -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="Admaker API",
        description="Prompt assembly gateway for image, video and voice generation",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        debug=debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(health_router)
    app.include_router(image_router)
    app.include_router(video_router)
    app.include_router(voice_router)
    app.include_router(studio_router)
    app.include_router(ui_router)

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        """Return a simple SVG favicon to prevent 404 errors."""
        svg_icon = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 32 32">
            <rect width="32" height="32" rx="6" fill="#000"/>
            <path d="M10 8v16l14-8z" fill="white"/>
        </svg>'''
        return Response(content=svg_icon, media_type="image/svg+xml")

    return app


app = create_app(debug=config.debug)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "admaker.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
