"""
Main entrypoint for the Expense Tracker API.

This module assembles the FastAPI application: logging, CORS, the
database lifecycle, error translation and the ``/api`` routes.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app`` so it can be served
directly, e.g.::

    uvicorn expense_tracker_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import Database, resolve_database_path
from .core.errors import InternalError, ServiceError
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database and apply migrations on startup; close it on shutdown."""
    db = Database(resolve_database_path(app.state.settings.database_url)).connect()
    db.init_db()
    app.state.db = db
    try:
        yield
    finally:
        db.close()


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if location:
        return f"{'.'.join(location)}: {first.get('msg', 'invalid value')}"
    return first.get("msg", "Invalid request")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module-level ``settings``; tests
        pass their own to point at a temporary database.

    Returns
    -------
    FastAPI
        A configured application instance.
    """
    app_settings = app_settings or default_settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials="*" not in app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": _describe_validation_error(exc)},
        )

    @app.middleware("http")
    async def internal_error_boundary(request: Request, call_next):
        # Anything that escapes the handlers above is reported as a bare 500.
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=InternalError.status_code,
                content={"detail": InternalError.default_message},
            )

    @app.get("/", tags=["health"])
    async def health() -> dict:
        return {"message": "Expense Tracker API is running!"}

    app.include_router(api_router, prefix="/api")
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
