"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from calorie_tracker.api.errors import bad_request
from calorie_tracker.api.meals import router as meals_router
from calorie_tracker.api.profile import router as profile_router
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.config import WILDCARD_ORIGIN, parse_cors_origins
from calorie_tracker.containers import AppContainer

API_NAME = "Calorie Tracker API"
API_VERSION = "1.0.0"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting %s (%s)", API_NAME, container.settings.environment)
        yield
        await app.state.container.close_resources()

    app = FastAPI(title=API_NAME, version=API_VERSION, lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(RequestValidationError)
    async def validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed requests as 400 like other request failures."""
        return bad_request(request.app.state.container, exc, "Invalid request")

    allowed_origins = parse_cors_origins(container.settings.cors_allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        # Browsers refuse credentialed responses to a wildcard origin.
        allow_credentials=WILDCARD_ORIGIN not in allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meals_router)
    app.include_router(profile_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/info", tags=["info"])
    async def api_info() -> dict[str, str]:
        """Describe the running service."""
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "description": "Calorie tracking with AI meal analysis",
            "status": "Running",
        }

    return app
