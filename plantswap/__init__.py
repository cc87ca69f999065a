# 📄 File: plantswap/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this folder contains the plant exchange service and records its version.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version info for the PlantSwap FastAPI service.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - plantswap.main (application entry point)

"""
PlantSwap - Community Plant Exchange API

Backend for listing plants, browsing listings and negotiating
peer-to-peer plant exchanges.
"""

__version__ = "1.0.0"
__title__ = "PlantSwap API"
__description__ = "Community marketplace for peer-to-peer plant exchanges"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
