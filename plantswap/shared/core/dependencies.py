# 📄 File: plantswap/shared/core/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Shared helpers that every endpoint can ask for: "who is calling?", "give me the database client",
# "give me the photo storage" and "give me the event messenger".
# 🧪 Purpose (Technical Summary):
# Common FastAPI dependencies: explicit CurrentUser actor built from the token claims the
# AuthenticationMiddleware placed on request.state, plus providers for the Supabase client,
# storage client and the process-wide EventPublisher.
# 🔗 Dependencies:
# FastAPI, supabase, plantswap.shared.config.*, plantswap.shared.events.publisher
# 🔄 Connected Modules / Calls From:
# plantswap.modules.*.presentation.dependencies, all authenticated endpoints

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Request
from supabase import Client

from ..config.settings import get_settings
from ..config.supabase import get_supabase_client
from ..events.publisher import EventPublisher
from ..infrastructure.storage import SupabaseStorageClient
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class CurrentUser:
    """Actor identity extracted from a verified access token."""

    def __init__(
        self,
        user_id: str,
        email: Optional[str] = None,
        role: str = "authenticated",
        token_payload: Optional[Dict[str, Any]] = None
    ):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.token_payload = token_payload or {}

    def owns(self, owner_id: Optional[str]) -> bool:
        """Check if this actor is the given owner."""
        return owner_id is not None and owner_id == self.user_id

    def __repr__(self) -> str:
        return f"CurrentUser(user_id={self.user_id!r})"


async def get_current_user(request: Request) -> CurrentUser:
    """
    The acting user for this request.

    AuthenticationMiddleware has already verified the token; reaching here
    without a subject means the route was wrongly listed as public.
    """
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        logger.warning(f"No token subject on {request.method} {request.url.path}")
        raise AuthenticationError("User not authenticated")

    return CurrentUser(
        user_id=user_id,
        email=getattr(request.state, "user_email", None),
        role=getattr(request.state, "user_role", "authenticated"),
        token_payload=getattr(request.state, "token_payload", {}),
    )


def get_supabase() -> Client:
    """Supabase client for repositories."""
    return get_supabase_client()


@lru_cache()
def get_storage_client() -> SupabaseStorageClient:
    """
    Process-wide storage client for plant photos and avatars.

    Shared so buckets are checked once per process, not once per upload.
    """
    return SupabaseStorageClient(get_supabase_client(), get_settings())


@lru_cache()
def get_event_publisher() -> EventPublisher:
    """
    Process-wide event publisher.

    Handlers are subscribed once during application startup.
    """
    return EventPublisher()
