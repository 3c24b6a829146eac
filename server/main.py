"""
Main FastAPI application for the nullresults.club backend.

This is the entry point for the experiments API and the pages that browse
and submit failed-experiment write-ups.
"""

import logging
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.experiments import router as experiments_router
from api.pages import router as pages_router
from api.validation import ExperimentValidationError
from client import ExperimentApiClient
from config import Settings, get_settings, get_system_info
from database import create_db_engine, create_session_factory, init_db, check_db_connection

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; defaults to the cached environment settings
        session_factory: Storage handle; built from ``settings.database_url``
            when omitted. An empty database URL leaves the app without storage
            and every store operation answers 500.
    """
    settings = settings or get_settings()

    if session_factory is None and settings.database_url:
        engine = create_db_engine(settings.database_url, echo=settings.database_echo)
        session_factory = create_session_factory(engine)

    app = FastAPI(
        title=settings.app_name,
        description="A home for experiments that didn't quite work out",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings
    app.state.session_factory = session_factory

    if settings.api_base_url:
        app.state.api_client = ExperimentApiClient(settings.api_base_url, timeout=settings.client_timeout)
    else:
        app.state.api_client = ExperimentApiClient(
            "http://nullresults.internal",
            transport=httpx.ASGITransport(app=app, raise_app_exceptions=False),
            timeout=settings.client_timeout,
        )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(experiments_router)
    app.include_router(pages_router)

    @app.on_event("startup")
    async def startup_event():
        """Initialize database on application startup."""
        logger.info(f"=== Starting {settings.app_name} server ===")
        logger.info(f"Configuration: {get_system_info(settings)}")
        if app.state.session_factory is None:
            logger.warning("No database configured - store operations will fail")
            return

        try:
            logger.info("Step 1: Creating tables...")
            init_db(app.state.session_factory.kw["bind"])

            logger.info("Step 2: Checking database connection...")
            if check_db_connection(app.state.session_factory):
                logger.info("✓ Database connection verified successfully")
            else:
                logger.error("✗ Database connection failed - store operations will fail")
        except Exception as e:
            logger.error(f"Database startup error: {e}")
            logger.warning("Server starting without database - some features may not work")

        logger.info("=== Startup complete ===")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "database": "configured" if app.state.session_factory is not None else "unavailable",
        }

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render HTTP errors as ``{"error": ...}``."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(ExperimentValidationError)
    async def validation_exception_handler(request: Request, exc: ExperimentValidationError):
        """Render boundary validation failures as 400s."""
        content = {"error": exc.message}
        if exc.fields:
            content["fields"] = exc.fields
        return JSONResponse(status_code=400, content=content)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.error(f"Unhandled exception: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"}
        )

    return app


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run("asgi:app", host=settings.api_host, port=settings.api_port, reload=settings.debug)
