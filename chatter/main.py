# 📄 File: chatter/main.py
#
# 🧭 Purpose (Layman Explanation):
# The control center that starts Chatter: it connects to the database, brings the database layout
# up to date, and plugs in the login endpoints and the GraphQL users API.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory with lifespan-managed MongoDB connection and startup migrations,
# middleware setup, router registration (REST auth, GraphQL, health) and exception handlers
# rendering ChatterException as structured JSON.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - chatter.shared.config.settings
# - chatter.shared.infrastructure.database (connection, migrations)
# - chatter.modules.user_management.presentation (routers)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup (factory mode)
# - tests (application factory)

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chatter.api.health import health_router
from chatter.api.middleware.logging import REQUEST_ID_HEADER, RequestLoggingMiddleware
from chatter.modules.user_management.domain.services.auth_service import AuthService
from chatter.modules.user_management.presentation.api.auth import auth_router
from chatter.modules.user_management.presentation.graphql.schema import create_graphql_router
from chatter.shared.config.settings import Settings, get_settings
from chatter.shared.core.exceptions import ChatterException
from chatter.shared.core.security import PasswordHasher
from chatter.shared.infrastructure.database.connection import MongoConnectionManager
from chatter.shared.infrastructure.database.migrations import run_startup_migrations
from chatter.shared.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Connects to MongoDB, applies pending migrations when enabled, and closes
    the client on shutdown. A failed migration aborts startup.
    """
    settings: Settings = app.state.settings
    logger.info(f"{settings.APP_NAME} starting up...")

    connection_manager = MongoConnectionManager(
        uri=settings.MONGODB_URI,
        db_name=settings.DB_NAME,
        server_selection_timeout_ms=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
    )
    app.state.connection_manager = connection_manager
    app.state.database = await connection_manager.connect()

    try:
        if settings.RUN_MIGRATIONS_ON_STARTUP:
            await run_startup_migrations(settings)

        logger.info(f"{settings.APP_NAME} startup complete")
        yield

    finally:
        logger.info(f"{settings.APP_NAME} shutting down...")
        await connection_manager.disconnect()
        app.state.database = None
        logger.info(f"{settings.APP_NAME} shutdown complete")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Configuration to use; defaults to the cached environment settings

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    setup_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # Collaborators live on app.state; request dependencies read them from there
    app.state.settings = settings
    app.state.database = None
    app.state.password_hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.auth_service = AuthService(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expiration_seconds=settings.JWT_EXPIRATION,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    app.include_router(create_graphql_router(), prefix="/graphql", tags=["GraphQL"])

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(ChatterException)
    async def chatter_exception_handler(request: Request, exc: ChatterException) -> JSONResponse:
        """Handle custom Chatter application exceptions."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code}: {exc.message}", exc_info=exc)
        else:
            logger.info(f"{exc.error_code}: {exc.message}")

        content = exc.to_dict()
        content["error"]["timestamp"] = datetime.now(timezone.utc).isoformat()
        content["error"]["request_id"] = getattr(request.state, "request_id", None)
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(Exception)
    async def internal_server_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected errors without leaking internals."""
        logger.error(f"Internal server error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_SERVER_ERROR",
                    "message": "An internal server error occurred",
                    "details": {"error_type": type(exc).__name__} if settings.DEBUG else {},
                    "request_id": getattr(request.state, "request_id", None),
                }
            },
        )

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "health_check": "/health",
            "graphql": "/graphql",
        }

    return app


def main():
    """
    Run the application in development.

    Used when running ``python -m chatter.main`` or the ``chatter`` script.
    """
    settings = get_settings()
    uvicorn.run(
        "chatter.main:create_application",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
