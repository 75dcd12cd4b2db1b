"""
FastAPI gateway for vital-sign health suggestions.

This gateway provides a REST API that turns body temperature, pulse and SpO₂
readings into a plain-text health assessment written by a generative-text
model (Gemini by default).
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from vitals_gateway import __version__
from vitals_gateway.config import Settings, load_settings
from vitals_gateway.routers import health, suggestion
from vitals_gateway.routers.suggestion import INVALID_PAYLOAD_MESSAGE
from vitals_gateway.services.suggestion import SuggestionClient


def configure_logging(settings: Settings) -> int:
    """
    Add the gateway's rotating file sink.

    Returns:
        Loguru handler id of the sink
    """
    return logger.add(
        str(Path(settings.log_dir) / "vitals_gateway_{time}.log"),
        rotation="100 MB",
        retention="7 days",
        level=settings.log_level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
    )


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Builds the shared suggestion client on startup and closes it on shutdown.

    Args:
        app_instance: FastAPI application instance
    """
    settings: Settings = app_instance.state.settings
    sink_id = configure_logging(settings)

    # Startup: Runs when application starts
    logger.info("🚀 Vitals Suggestion Gateway starting up...")
    logger.info(f"   Version: {__version__}")
    logger.info(f"   Provider: {settings.provider} ({settings.model})")
    logger.info(f"   Docs: http://localhost:{settings.port}/docs")

    app_instance.state.suggestion_client = SuggestionClient(settings)

    yield  # Application runs here

    # Shutdown: Runs when application stops
    await app_instance.state.suggestion_client.close()
    logger.info("👋 Vitals Suggestion Gateway shutting down...")
    logger.remove(sink_id)


async def invalid_payload_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    """Reply 400 with a static message for unparseable or invalid bodies."""
    logger.warning(f"Rejected payload on {request.url.path}: {len(exc.errors())} validation error(s)")
    return PlainTextResponse(INVALID_PAYLOAD_MESSAGE, status_code=400)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Render HTTP errors as plain-text bodies."""
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Gateway settings (loaded from .env and the environment if omitted)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = load_settings()

    # Initialize FastAPI application with lifespan handler
    app_instance = FastAPI(
        title="Vitals Suggestion Gateway",
        description="REST API for health suggestions from vital-sign readings",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app_instance.state.settings = settings

    # Configure CORS middleware
    # CORS_ORIGINS env var: comma-separated list of allowed origins, "*" allows all
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    app_instance.add_exception_handler(RequestValidationError, invalid_payload_handler)
    app_instance.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Include routers
    app_instance.include_router(health.router)
    app_instance.include_router(suggestion.router)

    # Root endpoint
    @app_instance.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "service": "Vitals Suggestion Gateway",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "suggestion": "/suggest"
        }

    return app_instance


app = create_app()


def run():
    """Serve the gateway with uvicorn."""
    settings: Settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)
