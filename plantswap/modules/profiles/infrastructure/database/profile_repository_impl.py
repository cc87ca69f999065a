# 📄 File: plantswap/modules/profiles/infrastructure/database/profile_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# The part that actually reads and writes member profiles in the hosted database.
# 🧪 Purpose (Technical Summary):
# Supabase implementation of ProfileRepository over the `profiles` table.
# 🔗 Dependencies:
# supabase Client, SupabaseTable gateway, Profile domain model
# 🔄 Connected Modules / Calls From:
# profiles and exchanges presentation dependencies

from typing import Any, Dict, Iterable, List, Optional

from supabase import Client

from plantswap.shared.infrastructure.database import SupabaseTable

from ...domain.models.profile import Profile
from ...domain.repositories.profile_repository import ProfileRepository


class SupabaseProfileRepository(ProfileRepository):
    """ProfileRepository backed by the `profiles` table."""

    TABLE = "profiles"

    def __init__(self, client: Client):
        self.table = SupabaseTable(client, self.TABLE)

    async def create(self, profile: Profile) -> Profile:
        row = await self.table.insert(profile.to_row())
        return Profile.from_row(row)

    async def get_by_id(self, user_id: str) -> Optional[Profile]:
        row = await self.table.select_one(id=user_id)
        return Profile.from_row(row) if row else None

    async def get_by_username(self, username: str) -> Optional[Profile]:
        row = await self.table.select_one(username=username)
        return Profile.from_row(row) if row else None

    async def get_many(self, user_ids: Iterable[str]) -> List[Profile]:
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return []
        rows = await self.table.select(in_={"id": ids}, order_by=None)
        return [Profile.from_row(row) for row in rows]

    async def update(self, user_id: str, values: Dict[str, Any]) -> Optional[Profile]:
        rows = await self.table.update(values, id=user_id)
        return Profile.from_row(rows[0]) if rows else None
