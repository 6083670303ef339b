"""
EduPro Backend: FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes app configuration, middleware registration, route mounting,
       shared client construction, and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn edupro.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware:  Request ID → Logging → GZip → CORS     │
    │                                                      │
    │  Routes:                                             │
    │   /api/notes  /api/career   → require_identity → DB  │
    │   /api/search/...           → SearchService          │
    │   /  /health                → probes                 │
    │                                                      │
    │  app.state (built in lifespan):                      │
    │   http_client, identity_verifier, search_service     │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Build the shared httpx client, the identity verifier strategy, and
       the search service
    Shutdown:
    1. Close the httpx client
    2. Dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from edupro import __version__
from edupro.config import settings
from edupro.database import dispose_engine
from edupro.exceptions import (
    AuthError,
    DatabaseError,
    EduProError,
)
from edupro.middleware.logging import RequestLoggingMiddleware
from edupro.middleware.request_id import RequestIDMiddleware, request_id_var
from edupro.routes import career, health, notes, search
from edupro.services.auth_service import build_identity_verifier
from edupro.services.search_service import SearchService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    What:    Root logger with one stdout handler and a consistent format.
    When:    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every connection and query at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    The httpx client is shared by the identity verifier and the search service.
    Per-call deadlines are enforced by those services with asyncio.wait_for(),
    so the client itself only gets a generous transport timeout.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("EduPro Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    http_client = httpx.AsyncClient(timeout=httpx.Timeout(30.0))
    app.state.http_client = http_client
    app.state.identity_verifier = build_identity_verifier(settings, http_client)
    app.state.search_service = SearchService(
        http_client,
        timeout=settings.search_timeout_seconds,
        user_agent=settings.search_user_agent,
    )

    logger.info(
        "Server running on %s:%d | Auth mode: %s",
        settings.backend_host,
        settings.backend_port,
        app.state.identity_verifier.mode,
    )

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("EduPro Backend shutting down...")
    await http_client.aclose()
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        AuthError               → 401 (generic, cause logged only)
        DatabaseError           → 500 (generic, context logged only)
        EduProError (base)      → 500
        Exception (fallback)    → 500
    """

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError):
        """Missing and invalid credentials look the same to the client."""
        rid = request_id_var.get("")
        logger.warning(
            "[%s] Auth error (%s): %s",
            rid,
            type(exc).__name__,
            exc.message,
        )
        return JSONResponse(
            status_code=401,
            content={
                "success": False,
                "error": "authentication_failed",
                "message": "Authentication failed.",
                "request_id": rid,
            },
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(EduProError)
    async def handle_app_error(request: Request, exc: EduProError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace is logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance. Shared clients are attached to
    app.state by the lifespan; tests may set them directly or use
    app.dependency_overrides instead.
    """
    app = FastAPI(
        title="EduPro API",
        description=(
            "Study notes and career reports for authenticated users, "
            "plus best-effort web snippet search."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,  # Required for auth headers
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(notes.router)
    app.include_router(career.router)
    app.include_router(search.router)

    return app


app = create_app()
