"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.errors import (
    cors_middleware,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from src.api.health import router as health_router
from src.api.rate_limit import limiter, rate_limit_exceeded_handler, set_rate_limit
from src.config import Settings, get_settings
from src.infrastructure.observability import (
    configure_logging,
    init_observability,
    shutdown_observability,
)
from src.modules.businesses.routes import router as businesses_router
from src.modules.businesses.routes import set_business_service
from src.modules.businesses.service import BusinessService
from src.modules.businesses.store import JsonFileStore

logger = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the directory application.

    Args:
        settings: Settings to use instead of the cached environment
            settings (tests pass an isolated data file here).

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
        """Application lifespan handler for startup/shutdown."""
        store = JsonFileStore(settings.data_file)
        set_business_service(BusinessService(store))
        logger.info("business_store_configured", path=str(store.path))

        yield

        set_business_service(None)
        if settings.tracing_enabled:
            shutdown_observability()
        logger.info("application_stopped")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.dependency_overrides[get_settings] = lambda: settings

    configure_logging(settings.log_level, json_output=settings.log_json)

    # Adds middleware, so it has to run before startup
    if settings.tracing_enabled:
        init_observability(
            settings.app_name,
            settings.app_version,
            otlp_endpoint=settings.otlp_endpoint,
            console_export=settings.trace_console_export,
            sample_rate=settings.trace_sample_rate,
            app=app,
        )
        logger.info("tracing_enabled", otlp_endpoint=settings.otlp_endpoint)

    # Rate limiting
    set_rate_limit(settings)
    app.state.limiter = limiter
    app.add_exception_handler(
        RateLimitExceeded,
        rate_limit_exceeded_handler,  # type: ignore[arg-type]
    )

    # Error envelope
    app.add_exception_handler(
        StarletteHTTPException,
        http_exception_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        RequestValidationError,
        validation_exception_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.middleware("http")(cors_middleware)

    # Register routers
    app.include_router(health_router, prefix="/health", tags=["health"])
    app.include_router(businesses_router, prefix=settings.api_prefix)

    return app


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
