"""Art Appraisal - Main FastAPI Application

Anonymous artwork intake with capability-token retrieval and a single
operator console for recording appraisals.

This module builds the FastAPI application, including:
- API routers (submissions, operator console, operator login)
- Middleware (request ID correlation, CORS)
- Exception handlers
- Health and observability endpoints

Run with:
    uvicorn appraisal.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .config import Settings, get_settings
from .database import build_engine, build_session_factory, init_db
from .domain.submissions.ports.artifact_storage import ArtifactStorageError
from .infrastructure.storage import build_artifact_storage

# Observability
from .observability.logging_config import configure_logging
from .observability.middleware import RequestIDMiddleware
from .observability.router import router as observability_router

# Operator access
from .auth.router import router as auth_router

# Submissions
from .submissions.admin_router import router as admin_submissions_router
from .submissions.router import router as submissions_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    - Startup: log the effective environment
    - Shutdown: dispose of the database engine
    """
    settings: Settings = app.state.settings

    logger.info("Art Appraisal API starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Artifact backend: {settings.ARTIFACT_BACKEND}")
    if not settings.OPERATOR_PASSWORD:
        logger.warning("OPERATOR_PASSWORD is not set; operator login is disabled")
    if not settings.SESSION_SECRET:
        logger.warning("SESSION_SECRET is not set; operator sessions end when the process restarts")

    yield

    logger.info("Art Appraisal API shutting down...")
    app.state.engine.dispose()


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Returns a structured error response with field-level details.
    """
    logger.warning(f"Validation error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=422,
        content={
            "error": "validation_error",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may carry exception instances that json.dumps cannot encode
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


async def database_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Handle database errors.

    Logs the full error but returns a generic message to prevent
    information leakage.
    """
    logger.error(
        f"Database error on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "database_error",
            "message": "A database error occurred. Please try again later.",
        },
    )


async def storage_exception_handler(
    request: Request,
    exc: ArtifactStorageError
) -> JSONResponse:
    logger.error(
        f"Artifact storage error on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "storage_error",
            "message": "The photo could not be stored. Please try again later.",
        },
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle uncaught exceptions.

    Full details are logged but not exposed to the client.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred. Please try again later.",
        },
    )


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build a configured application.

    The database engine, session factory and artifact storage are created
    here, once, and kept on ``app.state`` for the request dependencies.

    Args:
        settings: Explicit settings (tests); defaults to get_settings()

    Raises:
        ValueError: If SESSION_SECRET is unset in production
    """
    settings = settings or get_settings()
    if settings.is_production and not settings.SESSION_SECRET:
        raise ValueError("SESSION_SECRET is required when ENVIRONMENT=production")

    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    docs_enabled = not settings.is_production
    app = FastAPI(
        title="Art Appraisal API",
        description="Artwork submission and appraisal service",
        version=__version__,
        debug=settings.DEBUG,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.artifact_storage = build_artifact_storage(settings)

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    # Added last so it wraps everything and correlates all log lines
    app.add_middleware(RequestIDMiddleware)

    # Exception handlers
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(ArtifactStorageError, storage_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Routers
    app.include_router(observability_router)
    app.include_router(submissions_router, prefix="/api/v1")
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(admin_submissions_router, prefix="/api/v1")

    @app.get("/", include_in_schema=False)
    def root() -> dict[str, Any]:
        """Root endpoint - API information."""
        return {
            "name": "Art Appraisal API",
            "version": __version__,
            "status": "running",
            "docs": "/docs" if docs_enabled else None,
        }

    @app.get("/api/v1", include_in_schema=False)
    def api_root() -> dict[str, Any]:
        """API v1 root endpoint."""
        return {
            "version": "v1",
            "status": "active",
            "endpoints": {
                "submissions": "/api/v1/submissions",
                "uploads": "/api/v1/uploads",
                "admin": "/api/v1/admin",
                "admin_submissions": "/api/v1/admin/submissions",
            }
        }

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("appraisal.main:create_app", factory=True, host="0.0.0.0", port=8000)
