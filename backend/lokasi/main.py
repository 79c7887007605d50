"""
Lokasi API - FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() wires the LocationStore, LocationService,
       middleware, exception handlers and routes, and returns the app.
Who:   Imported by uvicorn (`uvicorn lokasi.main:app`), by serverless hosts
       that import the ASGI app directly, and by `python -m lokasi`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌─────────┐ ┌──────┐ ┌───────────────┐  │
    │  │ Req ID │→│ Logging │→│ CORS │→│ Unhandled→500 │  │
    │  └────────┘ └─────────┘ └──────┘ └───────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────────────────────┐ ┌─────────────┐  │
    │  │ GET/POST/PUT/DELETE api/lokasi│ │ GET /health │  │
    │  └───────────────────────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Invalid id/body→400 │ NotFound→404 │ DB→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup (fail fast: any error aborts the process):
    1. Initialize logging
    2. Validate configuration (DATABASE_URL present)
    3. Connect the location store (bounded wait, ping, create schema)

    Shutdown:
    1. Dispose the store engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from lokasi import __version__
from lokasi.config import settings
from lokasi.exceptions import (
    InvalidIdentifierError,
    LokasiError,
    MalformedBodyError,
    NotFoundError,
    ServiceUnavailableError,
    StoreError,
)
from lokasi.middleware.errors import SERVER_ERROR_MESSAGE, UnhandledErrorMiddleware, error_response
from lokasi.middleware.logging import RequestLoggingMiddleware
from lokasi.middleware.request_id import RequestIDMiddleware, request_id_var
from lokasi.routes import health, locations
from lokasi.services.location_service import LocationService
from lokasi.services.location_store import LocationStore

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Origin", "Content-Type", "Accept"]


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before the store connects.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries log every request/statement at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _describe_validation_error(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into "koordinat.coordinates: Field required; ..."."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Body request tidak valid"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP status codes and `{"error": ...}` bodies.

    Handler hierarchy:
        InvalidIdentifierError  → 400
        MalformedBodyError      → 400
        RequestValidationError  → 400 (FastAPI default would be 422)
        HTTPException           → its status_code (unparseable body, unknown route, ...)
        NotFoundError           → 404
        ServiceUnavailableError → 500
        StoreError              → 500, driver message surfaced
        LokasiError (base)      → its status_code
        Exception (fallback)    → 500, generic message, stack trace logged.
                                  Route faults are normally caught earlier by
                                  UnhandledErrorMiddleware.
    """

    @app.exception_handler(InvalidIdentifierError)
    async def handle_invalid_identifier(request: Request, exc: InvalidIdentifierError):
        logger.warning("[%s] Invalid id: %r", request_id_var.get(""), exc.raw_id)
        return error_response(400, exc.message)

    @app.exception_handler(MalformedBodyError)
    async def handle_malformed_body(request: Request, exc: MalformedBodyError):
        logger.warning("[%s] Malformed body: %s", request_id_var.get(""), exc.message)
        return error_response(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.warning("[%s] Malformed body: %s", request_id_var.get(""), message)
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        logger.warning("[%s] HTTP %d: %s", request_id_var.get(""), exc.status_code, exc.detail)
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, exc.message)

    @app.exception_handler(ServiceUnavailableError)
    async def handle_service_unavailable(request: Request, exc: ServiceUnavailableError):
        logger.error("[%s] Store not connected", request_id_var.get(""))
        return error_response(500, exc.message)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error(
            "[%s] Store error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return error_response(500, exc.message)

    @app.exception_handler(LokasiError)
    async def handle_lokasi_error(request: Request, exc: LokasiError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Last resort for faults raised outside UnhandledErrorMiddleware."""
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return error_response(500, SERVER_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    store: Optional[LocationStore] = None,
    report_missing_as_success: Optional[bool] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Location store to use. When omitted, one is built from
            `settings` and DATABASE_URL is validated at startup.
        report_missing_as_success: Override for the legacy PUT/DELETE
            behavior; defaults to settings.report_missing_as_success.
    """
    owns_store = store is None
    if store is None:
        store = LocationStore.from_settings(settings)
    if report_missing_as_success is None:
        report_missing_as_success = settings.report_missing_as_success

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging()
        logger.info("Lokasi API %s starting up...", __version__)

        if owns_store:
            settings.validate_required()
        await store.connect()

        logger.info("Server ready at http://%s:%d", settings.host, settings.port)

        yield

        # ── Shutdown ──────────────────────────────────────────────────────
        logger.info("Lokasi API shutting down...")
        await store.close()
        logger.info("Shutdown complete.")

    app = FastAPI(
        title="Lokasi API",
        description="CRUD API for geotagged point locations (GeoJSON Point).",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.location_store = store
    app.state.location_service = LocationService(
        store, report_missing_as_success=report_missing_as_success
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → CORS → UnhandledError
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(locations.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on HOST:PORT (PORT defaults to 3000)."""
    import uvicorn

    uvicorn.run("lokasi.main:app", host=settings.host, port=settings.port)
