"""
DevCamper Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Served by uvicorn (devcamper.server:main, or `uvicorn devcamper.main:app`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│  Access Logging │→│     CORS     │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────┐ ┌─────────────────┐   │
    │  │ /api/v1/bootcamps (CRUD) │ │ GET /health     │   │
    │  └──────────────────────────┘ └─────────────────┘   │
    │                                                     │
    │  Error Normalizer:                                  │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ CastError→404 │ 11000→400 │ Validation→400 │ 500 │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup (any failure aborts startup and the process exits):
    1. Initialize logging
    2. Build the geocoder (missing credentials are fatal)
    3. Connect to MongoDB (unreachable database is fatal)
    4. Log "Server running in <env> mode on port <port>"

    Shutdown:
    1. Close the MongoDB client
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devcamper import __version__
from devcamper.config import settings
from devcamper.database import MongoConnector
from devcamper.exceptions import DatabaseConnectionError, GeocoderConfigurationError
from devcamper.middleware.error_handler import register_exception_handlers
from devcamper.middleware.logging import RequestLoggingMiddleware, setup_logging
from devcamper.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from devcamper.routes import bootcamps, health
from devcamper.services.geocoder import GeocoderService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup and shutdown.

    Dependencies are built here and attached to app.state, so handlers
    receive explicit handles instead of module-level globals.
    """
    setup_logging()

    try:
        geocoder = GeocoderService.from_settings(settings)
    except GeocoderConfigurationError as e:
        logger.critical("%s", e.message)
        raise

    mongo = MongoConnector.from_settings(settings)
    try:
        await mongo.connect()
    except DatabaseConnectionError:
        await mongo.close()
        raise

    app.state.geocoder = geocoder
    app.state.mongo = mongo

    logger.info(
        "Server running in %s mode on port %d", settings.environment, settings.port
    )

    yield

    logger.info("DevCamper API shutting down...")
    await mongo.close()
    logger.info("Shutdown complete.")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns a fresh instance each call, so tests can build their own app
    and mount extra routes without touching the module-level one.
    """
    app = FastAPI(
        title="DevCamper API",
        description="Bootcamp directory API backed by MongoDB.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(bootcamps.router)
    app.include_router(health.router)

    return app


app = create_app()
