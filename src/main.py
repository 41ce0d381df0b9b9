"""Main FastAPI application entry point."""

import asyncio
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.router import router as api_router
from api.routes.health import router as health_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from infrastructure.database.session import check_database_connection, create_tables, engine

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    if settings.database_create_tables:
        await create_tables()
        logger.info("database_tables_ready")
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Developer Social Network\n\n"
            "DevConnect lets developers register, publish a profile with "
            "experience and education, and share posts with likes and comments.\n\n"
            "### Authentication\n"
            "Protected endpoints require the token returned by registration or "
            "login, in either header:\n"
            "```\nx-auth-token: <your_token>\nAuthorization: Bearer <your_token>\n```\n\n"
            "### Rate Limits\n"
            "- GET endpoints: 30 requests/minute\n"
            "- POST/PUT/DELETE: 10 requests/minute\n"
            "- Register and login: 5 requests/minute"
        ),
        version=settings.app_version,
        debug=settings.debug,
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "users",
                "description": "Registration",
            },
            {
                "name": "auth",
                "description": "Login and current user",
            },
            {
                "name": "profiles",
                "description": "Developer profiles, experience and education",
            },
            {
                "name": "posts",
                "description": "Posts, likes and comments",
            },
        ],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.is_production)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


async def _probe_database() -> None:
    try:
        await check_database_connection()
    finally:
        # The pool is bound to this event loop; uvicorn starts its own.
        await engine.dispose()


def run() -> None:
    """Verify the database is reachable, then serve the app."""
    import uvicorn

    try:
        asyncio.run(_probe_database())
    except (SQLAlchemyError, OSError) as e:
        logger.error("database_unreachable", error=str(e))
        sys.exit(1)

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )


if __name__ == "__main__":
    run()
