"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from shared.logging import configure_logging
from modules.ai.routes import router as ai_router
from modules.auth.routes import router as auth_router
from modules.categories.routes import router as categories_router
from modules.savings_goals.routes import router as savings_goals_router
from modules.transactions.routes import router as transactions_router

from .dependencies import ServiceContainer
from .errors import register_exception_handlers
from .routes import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    container: ServiceContainer = app.state.container
    settings = container.settings
    configure_logging(settings.log_level)
    await container.categories.seed_defaults()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        container: Service container to use; a default one is built from
            get_settings() if omitted

    Returns:
        Configured FastAPI instance
    """
    container = container or ServiceContainer()
    settings = container.settings

    app = FastAPI(
        title=settings.app_name,
        description="Personal finance tracking API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )
    app.state.container = container

    # Configure CORS. Only configured origins are allowed.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, tags=["health"])
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(transactions_router, prefix="/api/transactions", tags=["transactions"])
    app.include_router(categories_router, prefix="/api/categories", tags=["categories"])
    app.include_router(savings_goals_router, prefix="/api/savings-goals", tags=["savings-goals"])
    app.include_router(ai_router, prefix="/api/ai", tags=["ai"])

    return app


# Application instance for uvicorn
app = create_app()
