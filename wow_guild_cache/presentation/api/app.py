"""
WoW Guild Cache - FastAPI application
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from ...application.services import GuildRefreshService
from ...core.config import Settings, get_settings
from ...infrastructure.api import BlizzardAPIClient
from ...infrastructure.database import DatabaseConnection, GuildRepository
from ...infrastructure.telemetry import ErrorReporter
from .routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} v{settings.app_version}...")

    database: Optional[DatabaseConnection] = None
    client: Optional[BlizzardAPIClient] = None

    if app.state.guild_service is None:
        database = DatabaseConnection.from_config(settings.database)
        await database.initialize()
        await database.create_tables()
        logger.info("Database initialized")

        client = BlizzardAPIClient(settings.api)
        await client.initialize()

        app.state.guild_service = GuildRefreshService(
            store=GuildRepository(database),
            client=client,
            reporter=app.state.error_reporter
        )

    app.state.database = database

    try:
        yield
    finally:
        logger.info("Waiting for background refreshes...")
        await app.state.guild_service.drain()
        if client:
            await client.close()
        if database:
            await database.shutdown()
        logger.info(f"{settings.app_name} stopped")


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[GuildRefreshService] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings override; defaults to environment settings
        service: Preconfigured guild service; skips database and client setup
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Stale-while-revalidate cache for World of Warcraft guild profiles",
        version=settings.app_version,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.guild_service = service
    app.state.database = None
    if service is not None and isinstance(service.reporter, ErrorReporter):
        app.state.error_reporter = service.reporter
    else:
        app.state.error_reporter = ErrorReporter()

    # Open to any origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Request monitoring middleware
    @app.middleware("http")
    async def monitor_requests(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        # Open to any caller, with or without an Origin header
        response.headers.setdefault("Access-Control-Allow-Origin", "*")

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"{response.status_code} - {process_time:.3f}s"
        )

        return response

    @app.exception_handler(RequestValidationError)
    async def malformed_path_handler(request: Request, exc: RequestValidationError):
        """Paths outside the guild route shape are simply not found."""
        logger.debug(f"Rejected {request.url.path}: {exc.errors()}")
        return Response(status_code=404)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring"""
        database = app.state.database
        service = app.state.guild_service
        return {
            "status": "healthy",
            "service": "wow-guild-cache",
            "database": await database.health_check() if database else None,
            "pending_refreshes": service.pending_tasks if service else 0,
            "errors_reported": app.state.error_reporter.total_reported,
        }

    app.include_router(router)
    return app
