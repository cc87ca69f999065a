# 📄 File: plantswap/api/middleware/authentication.py
# 🧭 Purpose (Layman Explanation):
# Only signed-in gardeners may browse, list or trade plants. This checks the access token the
# hosted login service handed out and remembers who is calling.
# 🧪 Purpose (Technical Summary):
# Authentication middleware that verifies Supabase-issued JWTs (python-jose, shared secret, audience),
# injects the actor identity into request.state and the logging context, and rejects
# unauthenticated calls to protected endpoints with a uniform error body.
# 🔗 Dependencies:
# FastAPI, python-jose, plantswap.shared.config.settings, plantswap.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# plantswap.main (middleware registration), plantswap.shared.core.dependencies.get_current_user

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from jose import JWTError, jwt
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from plantswap.shared.config.settings import get_settings
from plantswap.shared.utils.logging import user_id_var

logger = logging.getLogger(__name__)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Authentication middleware for Supabase access tokens

    This middleware:
    - Reads the bearer token from the Authorization header
    - Verifies signature, expiry and audience
    - Stores the token subject as the acting user on request.state
    - Lets public paths (health, docs) through untouched
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.settings = get_settings()

        # Reachable without a token; prefixes also cover their sub-paths
        self.public_paths = [
            "/",
            "/docs",
            "/redoc",
            "/openapi.json",
            "/favicon.ico",
            "/health",
            "/api/v1/health",
        ]

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS" or self._is_public_path(request.url.path):
            return await call_next(request)

        token = self._extract_token(request)
        if not token:
            return self._unauthorized("No authentication token provided")

        payload = self._verify_token(token)
        if not payload or not payload.get("sub"):
            return self._unauthorized("Invalid or expired token")

        request.state.user_id = payload["sub"]
        request.state.user_email = payload.get("email")
        request.state.user_role = payload.get("role", "authenticated")
        request.state.token_payload = payload
        user_id_var.set(payload["sub"])

        return await call_next(request)

    def _extract_token(self, request: Request) -> Optional[str]:
        """Bearer token from the Authorization header, if any."""
        authorization = request.headers.get("authorization", "")
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        return token.strip()

    def _verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Claims of a token signed with the project secret for our audience, else None."""
        try:
            return jwt.decode(
                token,
                self.settings.SUPABASE_JWT_SECRET,
                algorithms=[self.settings.JWT_ALGORITHM],
                audience=self.settings.JWT_AUDIENCE,
            )
        except JWTError as e:
            logger.warning(f"Rejected access token: {e}")
            return None

    def _is_public_path(self, path: str) -> bool:
        if path in self.public_paths:
            return True

        for public_path in self.public_paths:
            if public_path != "/" and path.startswith(public_path + "/"):
                return True
        return False

    def _unauthorized(self, message: str) -> JSONResponse:
        return JSONResponse(
            status_code=401,
            content={
                "error": {
                    "code": "AUTHENTICATION_REQUIRED",
                    "message": message,
                    "details": {"auth_methods": ["Bearer token"]},
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                }
            },
            headers={"WWW-Authenticate": "Bearer"},
        )
