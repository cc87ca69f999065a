# 📄 File: plantswap/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects the checkpoints every request passes through: logging and the identity check.
# 🧪 Purpose (Technical Summary):
# Middleware package exports for registration in the application factory.
# 🔗 Dependencies:
# Starlette BaseHTTPMiddleware subclasses in this package
# 🔄 Connected Modules / Calls From:
# plantswap.main

from .authentication import AuthenticationMiddleware
from .logging import RequestLoggingMiddleware

__all__ = [
    "AuthenticationMiddleware",
    "RequestLoggingMiddleware",
]
