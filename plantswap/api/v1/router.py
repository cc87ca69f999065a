# 📄 File: plantswap/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1 of the API: sends plant requests to the listings code,
# offer requests to the exchange code, and so on.
# 🧪 Purpose (Technical Summary):
# Aggregates the module routers under their prefixes and tags for the /api/v1 mount.
# 🔗 Dependencies:
# FastAPI, plantswap.api.v1.health, plantswap.modules.*.presentation.api.v1
# 🔄 Connected Modules / Calls From:
# plantswap.main

from fastapi import APIRouter

from plantswap.modules.exchanges.presentation.api.v1 import exchanges_router
from plantswap.modules.listings.presentation.api.v1 import plants_router
from plantswap.modules.notifications.presentation.api.v1 import notifications_router
from plantswap.modules.profiles.presentation.api.v1 import profiles_router

from .health import health_router

api_router = APIRouter()

# =========================================================================
# MODULE ROUTERS
# =========================================================================

api_router.include_router(health_router, prefix="/health", tags=["Health Check"])

# Listings own /plants and /users/{user_id}/plants
api_router.include_router(plants_router, tags=["Plants"])

api_router.include_router(profiles_router, prefix="/profiles", tags=["Profiles"])

# Exchanges own /exchanges and /plants/{plant_id}/exchange
api_router.include_router(exchanges_router, tags=["Exchanges"])

api_router.include_router(notifications_router, prefix="/notifications", tags=["Notifications"])
