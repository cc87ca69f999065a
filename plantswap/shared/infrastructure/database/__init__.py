from .supabase_table import SupabaseTable

__all__ = ["SupabaseTable"]
