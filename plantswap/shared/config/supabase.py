"""
Supabase client for the plant exchange backend.

One lazily created client per process serves the row API (plants, profiles,
exchange_offers, notifications) and the storage buckets.
"""

import logging
from functools import lru_cache
from typing import Optional

from supabase import create_client, Client
from supabase.lib.client_options import ClientOptions

from .settings import get_settings


logger = logging.getLogger(__name__)


class SupabaseManager:
    """
    Owns the process-wide Supabase client.

    The client is built on first use so importing the app, or running the
    test suite, never needs a reachable backend.
    """

    def __init__(self):
        self._client: Optional[Client] = None
        self.settings = get_settings()

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = self._build_client()
        return self._client

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    def _build_client(self) -> Client:
        options = ClientOptions(
            schema="public",
            headers={"User-Agent": f"PlantSwap/{self.settings.APP_VERSION}"},
            postgrest_client_timeout=self.settings.SUPABASE_POSTGREST_TIMEOUT,
            storage_client_timeout=self.settings.SUPABASE_STORAGE_TIMEOUT,
        )
        try:
            client = create_client(
                supabase_url=self.settings.SUPABASE_URL,
                supabase_key=self.settings.backend_key,
                options=options
            )
        except Exception as e:
            logger.error(f"Could not create Supabase client for {self.settings.SUPABASE_URL}: {e}")
            raise ConnectionError(f"Supabase initialization failed: {e}") from e

        key_kind = "service role" if self.settings.SUPABASE_SERVICE_ROLE_KEY else "anon"
        logger.info(f"Supabase client ready ({key_kind} key)")
        return client

    def ping(self) -> None:
        """One-row query against the plants table; raises when the backend is unreachable."""
        self.client.table("plants").select("id").limit(1).execute()

    def close(self):
        if self._client is not None:
            self._client = None
            logger.info("Supabase client released")


@lru_cache()
def get_supabase_manager() -> SupabaseManager:
    return SupabaseManager()


def get_supabase_client() -> Client:
    """The shared client, created on first call."""
    return get_supabase_manager().client


async def cleanup_supabase():
    """Release the shared client on shutdown."""
    manager = get_supabase_manager()
    if manager.is_initialized:
        manager.close()
    logger.info("Supabase cleanup completed")
