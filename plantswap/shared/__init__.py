# 📄 File: plantswap/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as a Python package containing common tools that every part
# of the plant exchange app uses, like settings, the backend connection and logging.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package initialization for configuration, Supabase infrastructure,
# exceptions, domain events and logging used by all PlantSwap modules.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - All application modules importing shared utilities

"""
Shared Kernel - Common Utilities and Infrastructure

- Configuration management
- Supabase row and storage access
- Exceptions and FastAPI dependencies
- In-process domain events
- Logging utilities
"""

__all__ = []
