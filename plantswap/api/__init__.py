# 📄 File: plantswap/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Marks the api folder as a package holding the web entry points, their middleware and versions.
# 🧪 Purpose (Technical Summary):
# Package initialization for the API layer: versioning constants shared by main and the v1 router.
# 🔗 Dependencies:
# None (package initialization)
# 🔄 Connected Modules / Calls From:
# plantswap.main, plantswap.api.v1.router

"""
PlantSwap API Package

Structure:
    api/
    ├── middleware/          # authentication, request logging
    └── v1/                  # API version 1
        ├── router.py        # Main v1 router
        └── health.py        # Health check endpoints
"""

API_PREFIX = "/api"
CURRENT_VERSION = "v1"

DEFAULT_HEADERS = {
    "X-API-Version": CURRENT_VERSION,
    "X-App-Name": "PlantSwap",
}

__all__ = [
    "API_PREFIX",
    "CURRENT_VERSION",
    "DEFAULT_HEADERS",
]
