"""
TurtleWatch Backend - FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance; `app` below is the instance uvicorn serves.
Who:   uvicorn (`uvicorn turtlewatch.main:app`), the `turtlewatch` console
       script, and the test suite (with its own Settings).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────────────┐ ┌──────┐ ┌──────────┐     │
    │  │ Request ID + access  │→│ GZip │→│  CORS    │     │
    │  └──────────────────────┘ └──────┘ └──────────┘     │
    │                                                     │
    │  Routes (/api):                                     │
    │  users · turtles · turtle_survey_events · nests ·   │
    │  nest-events · test          (+ /health)            │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation/Conflict→400 │ Auth→401 │ Forb→403 │  │
    │  │ NotFound→404 │ Internal & unexpected→500      │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → Database resource → connectivity check → create tables
              (failures are logged; the app still starts)
    Shutdown: dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from turtlewatch import __version__
from turtlewatch.config import Settings, settings as default_settings
from turtlewatch.database import Database
from turtlewatch.exceptions import TurtleWatchError
from turtlewatch.middleware.logging import RequestIdFilter, RequestLoggingMiddleware
from turtlewatch.routes import health, nest_events, nests, survey_events, turtles, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure root logging once at startup.

    Format: 2025-03-01T06:12:44 [INFO] [3f9a1c2e] turtlewatch.services.nest_service: ...

    The bracketed field is the request ID ("-" outside a request).
    """
    log_format = (
        "%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s"
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,  # Override any existing logging config
    )

    # Third-party libraries log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Create the Database resource on startup and dispose it on shutdown.

    A bad DATABASE_URL or an unreachable server is logged and the app keeps
    running; database requests then fail with 500 and /health reports
    "unhealthy".
    """
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)
    logger.info("=" * 60)
    logger.info("TurtleWatch Backend starting up...")

    app.state.database = None
    try:
        app.state.database = Database(settings)
        await app.state.database.ping()
        logger.info("Connected to database")
        if settings.db_create_tables:
            await app.state.database.create_all()
            logger.info("Database tables verified")
    except Exception as e:
        logger.error("Database connection error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("TurtleWatch Backend shutting down...")
    if app.state.database is not None:
        await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to `{"error": message}` responses.

    Handler hierarchy:
        TurtleWatchError subclasses → their status_code (400/401/403/404/500)
        RequestValidationError      → 400 (malformed JSON, wrong types)
        Starlette HTTPException     → its status (unknown route, bad method)
        Exception (fallback)        → 500, generic message

    Details (context, stack traces) go to the server log only.
    """

    @app.exception_handler(TurtleWatchError)
    async def handle_app_error(request: Request, exc: TurtleWatchError):
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed: %s | Context: %s",
                request.method, request.url.path, exc.message, exc.context,
            )
        else:
            logger.warning(
                "%s %s rejected (%d): %s | Context: %s",
                request.method, request.url.path, exc.status_code, exc.message, exc.context,
            )
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"Invalid value for '{location}': {first.get('msg')}" if location \
                else f"Invalid request body: {first.get('msg')}"
        else:
            message = "Invalid request"
        logger.warning("Request validation error: %s", errors)
        return _error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "Unexpected error: %s",
            str(exc),
            exc_info=True,
        )
        return _error_response(500, "Internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to run with; the environment-derived
                  module settings when omitted.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="TurtleWatch API",
        description=(
            "Record-keeping API for a sea-turtle conservation program: "
            "user accounts, turtles, survey events, nests and nest events."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # Request ID + access log → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(turtles.router)
    app.include_router(survey_events.router)
    app.include_router(nests.router)
    app.include_router(nest_events.router)

    return app


# uvicorn expects `turtlewatch.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve `app` with uvicorn on the configured port."""
    import uvicorn

    uvicorn.run(
        "turtlewatch.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
