# 📄 File: plantswap/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups version 1 of the API so a later version can be added without breaking existing apps.
# 🧪 Purpose (Technical Summary):
# Package initialization for API version 1; routers are aggregated in router.py.
# 🔗 Dependencies:
# FastAPI
# 🔄 Connected Modules / Calls From:
# plantswap.main

"""
PlantSwap API Version 1

- Plant listings (browse, CRUD, photos)
- Profiles and avatars
- Exchange offers (create, select, confirm, cancel)
- Notification feed
- Health checks
"""

from .router import api_router

__all__ = ["api_router"]
