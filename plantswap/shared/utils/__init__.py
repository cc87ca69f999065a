# 📄 File: plantswap/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# Sets up the helper tools other parts of the app use, mainly for writing clear log messages.

# 🧪 Purpose (Technical Summary):
# Utilities package exposing the structured logging helpers.

# 🔗 Dependencies:
# - logging: Structured logging utilities

# 🔄 Connected Modules / Calls From:
# Used by: plantswap.main, middleware, domain services

from .logging import (
    get_logger,
    log_shutdown_event,
    log_startup_event,
    request_id_var,
    setup_logging,
    user_id_var,
)

__all__ = [
    "get_logger",
    "log_shutdown_event",
    "log_startup_event",
    "request_id_var",
    "setup_logging",
    "user_id_var",
]
