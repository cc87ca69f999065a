# 📄 File: plantswap/main.py
#
# 🧭 Purpose (Layman Explanation):
# Starts the plant exchange service: turns on logging, connects exchange updates to the
# notification feed, and puts every module's endpoints behind one /api/v1 address.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: logging setup, event handler registration,
# middleware stack, router registration under /api/v1 and the JSON error envelope.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - plantswap.shared.config (settings, Supabase client)
# - plantswap.api (middleware, v1 router)
# - plantswap.modules.notifications (exchange event handler)
#
# 🔄 Connected Modules / Calls From:
# - `plantswap` console script and `uvicorn plantswap.main:app`
# - tests (TestClient)

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from plantswap.api import API_PREFIX, CURRENT_VERSION, DEFAULT_HEADERS
from plantswap.api.middleware import AuthenticationMiddleware, RequestLoggingMiddleware
from plantswap.api.v1 import api_router
from plantswap.modules.notifications.domain.events.handlers import register_notification_handlers
from plantswap.modules.notifications.domain.services.notification_service import NotificationService
from plantswap.modules.notifications.infrastructure.database.notification_repository_impl import (
    SupabaseNotificationRepository,
)
from plantswap.shared.config.settings import get_settings
from plantswap.shared.config.supabase import cleanup_supabase, get_supabase_client
from plantswap.shared.core.dependencies import get_event_publisher, get_storage_client
from plantswap.shared.core.exceptions import PlantSwapException, is_server_error
from plantswap.shared.utils.logging import log_shutdown_event, log_startup_event, setup_logging

settings = get_settings()

logger = logging.getLogger(__name__)


def _notification_service() -> NotificationService:
    return NotificationService(SupabaseNotificationRepository(get_supabase_client()))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Configures logging and wires the exchange -> notification event flow on
    startup; releases the backend client on shutdown.
    """
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.LOG_FILE)
    log_startup_event(settings.APP_NAME, settings.APP_VERSION, {"environment": settings.ENVIRONMENT})
    logger.info("🌱 PlantSwap API starting up...")

    publisher = get_event_publisher()
    handler = register_notification_handlers(publisher, _notification_service)
    logger.info("✅ Exchange notifications wired")
    logger.info("✅ PlantSwap API startup complete")

    try:
        yield
    finally:
        logger.info("🔄 PlantSwap API shutting down...")
        publisher.unsubscribe(handler)
        get_storage_client.cache_clear()
        try:
            await cleanup_supabase()
            logger.info("✅ Supabase client released")
        except Exception as e:
            logger.error(f"❌ Could not release Supabase client: {e}")
        log_shutdown_event(settings.APP_NAME)


def _error_body(request: Request, error: dict) -> dict:
    return {
        "error": {
            **error,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request_id": getattr(request.state, "request_id", None),
        }
    }


def create_application() -> FastAPI:
    """
    Build the ASGI app. Interactive docs are only mounted when DEBUG is on;
    every error leaves as the same {"error": {...}} envelope.
    """
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

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================
    # Last added runs first: CORS -> request logging -> authentication -> routes

    app.add_middleware(AuthenticationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    @app.middleware("http")
    async def version_headers(request: Request, call_next):
        response: Response = await call_next(request)
        for header, value in DEFAULT_HEADERS.items():
            response.headers[header] = value
        return response

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(api_router, prefix=f"{API_PREFIX}/{CURRENT_VERSION}")

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(PlantSwapException)
    async def plantswap_exception_handler(
        request: Request,
        exc: PlantSwapException
    ) -> JSONResponse:
        if is_server_error(exc):
            logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")

        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, exc.to_dict()),
        )

    @app.exception_handler(Exception)
    async def internal_server_error_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        logger.error(f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}: {exc}", exc_info=True)

        return JSONResponse(
            status_code=500,
            content=_error_body(request, {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An internal server error occurred",
                "details": {"error_type": type(exc).__name__} if settings.DEBUG else {},
            }),
        )

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Service name, version and where the API lives."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": f"{API_PREFIX}/{CURRENT_VERSION}/health",
            "api_base": f"{API_PREFIX}/{CURRENT_VERSION}",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


app = create_application()


def main():
    """Entry point of the ``plantswap`` console script."""
    uvicorn.run(
        "plantswap.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
        workers=1 if settings.RELOAD else settings.WORKERS,
    )


if __name__ == "__main__":
    main()
