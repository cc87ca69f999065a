# 📄 File: plantswap/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# Tells load balancers and monitoring whether the plant exchange API is up and can reach
# its hosted backend.
# 🧪 Purpose (Technical Summary):
# Liveness and readiness endpoints. Readiness issues a one-row query against the Supabase
# row API in a worker thread and answers 503 when it fails or times out.
# 🔗 Dependencies:
# FastAPI, plantswap.shared.config (settings, Supabase client), asyncio
# 🔄 Connected Modules / Calls From:
# plantswap.api.v1.router, monitoring systems, load balancers

import asyncio
import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from plantswap.shared.config.settings import get_settings
from plantswap.shared.config.supabase import get_supabase_manager

logger = logging.getLogger(__name__)

health_router = APIRouter()

READINESS_TIMEOUT_SECONDS = 5.0

_app_start_time = time.monotonic()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _ping_backend() -> None:
    await asyncio.wait_for(
        asyncio.to_thread(get_supabase_manager().ping),
        timeout=READINESS_TIMEOUT_SECONDS,
    )


@health_router.get("",
                   summary="Basic Health Check",
                   description="Liveness endpoint for load balancers and monitoring")
async def health_check() -> JSONResponse:
    """Simple OK status; never touches the backend."""
    settings = get_settings()
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "uptime_seconds": round(time.monotonic() - _app_start_time, 1),
            "timestamp": _now(),
        }
    )


@health_router.get("/ready",
                   summary="Readiness Probe",
                   description="Checks that the hosted backend answers queries")
async def readiness_probe() -> JSONResponse:
    """
    Readiness probe

    Returns 200 when a trivial query against the row API succeeds,
    503 otherwise.
    """
    started = time.perf_counter()
    try:
        await _ping_backend()
    except asyncio.TimeoutError:
        logger.warning("Readiness probe timed out waiting for Supabase")
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "backend_timeout", "timestamp": _now()}
        )
    except Exception as e:
        logger.error(f"Readiness probe failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "backend_unavailable", "timestamp": _now()}
        )

    return JSONResponse(
        status_code=200,
        content={
            "status": "ready",
            "backend_latency_ms": round((time.perf_counter() - started) * 1000, 2),
            "timestamp": _now(),
        }
    )
