"""
OmaHub API - fashion marketplace backend on Supabase
"""
from contextlib import asynccontextmanager
from typing import Any, Dict

import sentry_sdk
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sentry_sdk.integrations.asgi import SentryAsgiMiddleware
from slowapi.errors import RateLimitExceeded
from starlette_context import plugins
from starlette_context.middleware import ContextMiddleware

from app.api.v1 import api_router
from app.core.config import settings
from app.core.exceptions import (
    BaseAPIException,
    ErrorResponse,
    handle_api_exception,
    handle_rate_limit_exception,
    handle_unexpected_exception,
    handle_validation_exception,
)
from app.core.logging import log, setup_logging
from app.core.rate_limit import limiter
from app.core.supabase import supabase_manager
from app.middleware import RequestIDMiddleware, SecurityHeadersMiddleware, TimingMiddleware

OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness and readiness checks"},
    {"name": "auth", "description": "Session cookie maintenance"},
    {"name": "brands", "description": "Public brand directory"},
    {"name": "collections", "description": "Collections and recommendations"},
    {"name": "products", "description": "Product catalogue"},
    {"name": "reviews", "description": "Brand reviews"},
    {"name": "favourites", "description": "Saved brands, collections and products"},
    {"name": "basket", "description": "Shopping basket and checkout"},
    {"name": "orders", "description": "Customer orders and made-to-measure requests"},
    {"name": "forms", "description": "Contact, feedback and newsletter forms"},
    {"name": "leads", "description": "Lead capture and the studio pipeline"},
    {"name": "faqs", "description": "Frequently asked questions"},
    {"name": "legal", "description": "Terms of service and privacy policy"},
    {"name": "studio", "description": "Brand owner and admin studio"},
    {"name": "admin", "description": "Moderation and super admin jobs"},
]

# Error bodies documented on every versioned route
ERROR_RESPONSES = {code: {"model": ErrorResponse} for code in (400, 401, 403, 404)}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan events
    """
    setup_logging()
    log.info("Starting OmaHub API", version=settings.VERSION, env=settings.ENVIRONMENT)

    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.ENVIRONMENT,
            traces_sample_rate=0.1,
            profiles_sample_rate=0.1,
        )
        log.info("Sentry initialized")

    # One Supabase client shared by every request
    await supabase_manager.init()

    yield

    log.info("Shutting down OmaHub API")
    await supabase_manager.close()


def add_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAPIException, handle_api_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_exception)
    app.add_exception_handler(RateLimitExceeded, handle_rate_limit_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)


def add_middleware(app: FastAPI) -> None:
    """
    Middleware stack; the last one added runs first.

    Timing wraps everything below it, request ids are bound before any
    handler logs, and Sentry (when configured) sees every error.
    """
    if settings.SENTRY_DSN:
        app.add_middleware(SentryAsgiMiddleware)

    if settings.BACKEND_CORS_ORIGINS:
        # The web client sends Supabase session cookies
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        ContextMiddleware,
        plugins=(
            plugins.RequestIdPlugin(),
            plugins.CorrelationIdPlugin(force_new_uuid=False),
        ),
    )
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(TimingMiddleware)


def create_application() -> FastAPI:
    """
    Create FastAPI application with all configurations
    """
    docs_prefix = settings.API_V1_STR if settings.DEBUG else None
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Brand directory, catalogue, studio and admin API for OmaHub",
        openapi_url=f"{docs_prefix}/openapi.json" if docs_prefix else None,
        docs_url=f"{docs_prefix}/docs" if docs_prefix else None,
        redoc_url=None,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
        debug=settings.DEBUG,
        openapi_tags=OPENAPI_TAGS,
        swagger_ui_parameters={"persistAuthorization": True, "displayRequestDuration": True},
    )

    # slowapi looks the limiter up on app state
    app.state.limiter = limiter

    add_exception_handlers(app)
    add_middleware(app)

    app.include_router(api_router, prefix=settings.API_V1_STR, responses=ERROR_RESPONSES)

    if settings.ENVIRONMENT != "development":
        Instrumentator(excluded_handlers=["/metrics", f"{settings.API_V1_STR}/health.*"]).instrument(app).expose(
            app, endpoint="/metrics", include_in_schema=False
        )

    @app.get("/", tags=["root"])
    async def root() -> Dict[str, Any]:
        """Service name, version and where the docs live"""
        return {
            "name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "docs": f"{docs_prefix}/docs" if docs_prefix else None,
        }

    return app


# Create the application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=settings.WORKERS if not settings.DEBUG else 1,
        log_config=None,  # loguru intercepts uvicorn's loggers
        server_header=False,
    )
