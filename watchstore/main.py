"""
Watch Store API - Main Application Entry Point.

Order pricing, order workflow and review/rating endpoints for the watch store.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from watchstore.core.config import settings
from watchstore.core.database import Database
from watchstore.core.errors import DomainError
from watchstore.core.logging import configure_logging, get_logger
from watchstore.middleware import (
    ErrorHandlerMiddleware,
    RequestContextMiddleware,
    domain_error_handler,
)
from watchstore.routers import (
    health_router,
    orders_router,
    reviews_router,
    users_router,
)

# Configure logging before anything else
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.
    Connects the database on startup and disposes of it on shutdown.
    """
    logger.info(
        "Starting application",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    database = Database(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    await database.connect()
    app.state.database = database

    if settings.sentry_dsn:
        import sentry_sdk

        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        logger.info("Sentry initialized")

    yield

    logger.info("Shutting down application")
    await database.disconnect()


def create_app() -> FastAPI:
    """
    Application factory function.
    Creates and configures the FastAPI application.
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Watch store orders, reviews and ratings API",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_exception_handler(DomainError, domain_error_handler)

    # Add middleware (order matters - last added = outermost)
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestContextMiddleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "X-Request-ID",
        ],
    )

    # Register routers
    app.include_router(health_router)
    app.include_router(orders_router, prefix="/api")
    app.include_router(reviews_router, prefix="/api")
    app.include_router(users_router, prefix="/api")

    logger.info(
        "Application created",
        routes=len(app.routes),
        cors_origins=len(settings.allowed_origins),
    )

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "watchstore.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
