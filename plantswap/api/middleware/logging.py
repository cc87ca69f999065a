# 📄 File: plantswap/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# One log line per API call with its outcome and duration, tagged with an id the client can
# quote when something goes wrong.
# 🧪 Purpose (Technical Summary):
# Request logging middleware: assigns or propagates an X-Request-ID, binds it to the logging
# context, and logs method, path, status code and processing time with slow-request warnings.
# 🔗 Dependencies:
# FastAPI, time, uuid, plantswap.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# plantswap.main (middleware registration), all API endpoints

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from plantswap.shared.utils.logging import request_id_var

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with X-Request-ID (the caller's, or a fresh uuid4) and
    logs one line per response. Health checks are tagged but not logged.
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold
        self.request_id_header = "X-Request-ID"
        self.excluded_paths = {"/health", "/api/v1/health", "/favicon.ico"}

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = self._request_id_for(request)
        request_id_var.set(request_id)

        if request.url.path in self.excluded_paths:
            response = await call_next(request)
            response.headers[self.request_id_header] = request_id
            return response

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            processing_time = time.perf_counter() - start_time
            logger.error(
                f"{request.method} {request.url.path} failed: {e}",
                extra={
                    "event_type": "http_error",
                    "method": request.method,
                    "path": request.url.path,
                    "processing_time_ms": round(processing_time * 1000, 2),
                    "error_type": type(e).__name__,
                },
            )
            raise

        processing_time = time.perf_counter() - start_time
        log_data = {
            "event_type": "http_response",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "processing_time_ms": round(processing_time * 1000, 2),
        }

        if processing_time > self.slow_request_threshold:
            logger.warning(f"Slow request {request.method} {request.url.path}", extra=log_data)
        elif response.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} -> {response.status_code}", extra=log_data)
        else:
            logger.info(f"{request.method} {request.url.path} -> {response.status_code}", extra=log_data)

        response.headers[self.request_id_header] = request_id
        return response

    def _request_id_for(self, request: Request) -> str:
        request_id = request.headers.get(self.request_id_header.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id
        return request_id
