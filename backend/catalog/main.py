"""
Product Catalog Backend — FastAPI Application Factory
=======================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       bound to one Database. Tests pass their own Database; uvicorn uses
       the module-level `app`, built from settings.
Who:   uvicorn (`uvicorn catalog.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌──────┐     │
    │  │  Req ID  │→│  Logging    │→│ GZip │→│ CORS │     │
    │  └──────────┘ └─────────────┘ └──────┘ └──────┘     │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────────────────┐ ┌─────────────────┐  │
    │  │ /products, /products/{id} │ │ GET /health     │  │
    │  └───────────────────────────┘ └─────────────────┘  │
    │                                                     │
    │  Error Translation (catalog.errors, in order):      │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ other→500    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config check → store ping → optional create_tables
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from catalog import __version__
from catalog.config import Settings, settings
from catalog.database import Database
from catalog.errors import register_exception_handlers
from catalog.middleware.errors import UnhandledErrorMiddleware
from catalog.middleware.logging import RequestLoggingMiddleware
from catalog.middleware.request_id import RequestIDMiddleware
from catalog.routes import health, products

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] catalog.access: GET /products 200 3.1ms ...
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    database: Optional[Database] = None,
    app_settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database:      Store handle to serve from. Built from settings when
                       omitted.
        app_settings:  Settings to use instead of the module-level instance.

    Returns:
        Fully configured FastAPI instance. The Database is reachable as
        `app.state.database`.
    """
    cfg = app_settings or settings
    db = database or Database.from_settings(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging(cfg.log_level)
        logger.info("Product Catalog Backend starting up...")

        try:
            cfg.validate_required_for_production()
        except ValueError as e:
            logger.error("Configuration error: %s", str(e))

        try:
            await db.ping()
            logger.info("Database reachable")
            if cfg.db_create_tables:
                await db.create_tables()
                logger.info("Database tables ensured")
        except Exception as e:
            # Keep serving: /health reports 503 until the store comes back
            logger.error("Database unreachable at startup: %s", str(e))

        logger.info("Server ready at http://%s:%d", cfg.backend_host, cfg.backend_port)

        yield

        # ── Shutdown ──────────────────────────────────────────────────────
        logger.info("Product Catalog Backend shutting down...")
        await db.dispose()
        logger.info("Shutdown complete.")

    app = FastAPI(
        title="Product Catalog API",
        description="CRUD service for the products resource.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.database = db
    app.state.settings = cfg

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → GZip → CORS → UnhandledError
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Error Translation ────────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(products.router)
    app.include_router(health.router)

    return app


# uvicorn expects `catalog.main:app` to be importable
app = create_app()
