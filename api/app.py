"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from modules.ai.routes import router as ai_router
from modules.auth.routes import router as auth_router
from modules.subscriptions.routes import router as subscriptions_router
from shared.config import Settings, get_settings

from .dependencies import get_container
from .errors import setup_exception_handlers
from .middleware.rate_limit import api_rate_limit
from .middleware.request_log import setup_request_logging
from .routes import health

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Set the root log level and a plain format for all module loggers."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic. The token codec is built at startup
    so a missing JWT_SECRET stops the server instead of failing requests.
    """
    # Startup
    container = get_container()
    container.token_codec
    settings = container.settings
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"({settings.environment}, storage={settings.storage_backend}, ai={settings.ai_provider})"
    )
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Authentication, subscription quotas and a metered generative-AI proxy",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    setup_request_logging(app)
    setup_exception_handlers(app)

    # Register routes
    limited = [Depends(api_rate_limit)]
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"], dependencies=limited)
    app.include_router(
        subscriptions_router,
        prefix="/api/subscriptions",
        tags=["subscriptions"],
        dependencies=limited,
    )
    app.include_router(ai_router, prefix="/api/ai", tags=["ai"], dependencies=limited)

    return app


# Application instance for uvicorn
app = create_app()
