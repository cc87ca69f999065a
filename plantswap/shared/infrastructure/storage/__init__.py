"""
Object storage for plant photos and profile avatars.
"""

from .supabase_storage import SupabaseStorageClient

__all__ = ["SupabaseStorageClient"]
