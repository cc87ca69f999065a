# 📄 File: plantswap/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell the plant exchange app how to reach the hosted
# backend, where to store photos, and how to log what it is doing.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization with exports for settings management
# and the Supabase client manager.
#
# 🔗 Dependencies:
# - settings.py (application settings)
# - supabase.py (backend client configuration)
#
# 🔄 Connected Modules / Calls From:
# - plantswap.main (application startup)
# - All modules requiring configuration

"""
Configuration Management Package

Handles all application configuration including:
- Environment-based settings
- Supabase client creation and storage bucket bootstrap
"""

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
