"""User API: FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserValidationError / RequestValidationError /
      Exception → structured JSON responses
    - Exactly one gateway per app, stored on app.state and injected into handlers
    - CORS configured from settings (not hardcoded)

Design Decisions:
    - Factory over module-level app: no import-time singletons; tests pass their
      own gateway, uvicorn runs with factory=True
    - Gateway built in the lifespan when not injected, so the database engine
      lives and dies with the server process
    - Swagger UI served at /api-docs and the root URL redirects there
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from user_api.api.error_handlers import register_error_handlers
from user_api.api.routes import health, users
from user_api.config import Settings, get_settings
from user_api.core.repository_protocols import UserGateway
from user_api.infrastructure.database import DatabaseSessionManager
from user_api.infrastructure.memory_gateway import InMemoryUserGateway
from user_api.infrastructure.observability import (
    RequestLoggingMiddleware, setup_logging,
)
from user_api.infrastructure.user_gateway import SqlAlchemyUserGateway

logger = logging.getLogger(__name__)


async def build_gateway(
    settings: Settings,
) -> tuple[UserGateway, DatabaseSessionManager | None]:
    """Construct the configured gateway (and its session manager, if any)."""
    if settings.storage_backend == "memory":
        return InMemoryUserGateway(), None
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await db_manager.create_tables()
    return SqlAlchemyUserGateway(db_manager), db_manager


def create_app(
    settings: Settings | None = None, gateway: UserGateway | None = None,
) -> FastAPI:
    """Build the FastAPI app. Pass `gateway` to skip building one from settings."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        db_manager = None
        if app.state.gateway is None:
            app.state.gateway, db_manager = await build_gateway(settings)
        logger.info(
            f"{settings.app_name} started (storage={settings.storage_backend})",
        )
        yield
        if db_manager is not None:
            await db_manager.dispose()
        logger.info(f"{settings.app_name} shutting down")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="CRUD API for managing users",
        docs_url="/api-docs",
        lifespan=lifespan,
    )
    app.state.gateway = gateway

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(users.router)

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/api-docs")

    register_error_handlers(app)
    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "user_api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
