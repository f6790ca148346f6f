"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    AuthenticationError,
    NotFoundError,
    TrackerError,
    ValidationError,
    field_errors,
)
from shared.logging_config import configure_logging
from modules.appliances.exceptions import OwnerUnresolvedError, StoreUnavailableError
from modules.appliances.routes import router as appliances_router

from .models.errors import ErrorResponse, ValidationErrorResponse
from .routes import health, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    logger.info("Shutting down %s", settings.app_name)


def _status_for(exc: TrackerError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, OwnerUnresolvedError):
        return 422
    if isinstance(exc, StoreUnavailableError):
        return 503
    return 500


async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    """Render domain errors as ``TrackerError.to_dict()`` with a matching status."""
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        body = ErrorResponse(error=exc.code, detail="Request failed", code=exc.code)
        return JSONResponse(status_code=status_code, content=body.model_dump())
    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Reject malformed payloads with per-field details."""
    body = ValidationErrorResponse(
        error="Validation failed",
        details=field_errors(exc.errors()),
    )
    return JSONResponse(status_code=400, content=body.model_dump())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Household appliance, warranty and maintenance tracking API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(TrackerError, tracker_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(appliances_router, prefix="/api/appliances", tags=["appliances"])

    return app


# Application instance for uvicorn
app = create_app()
