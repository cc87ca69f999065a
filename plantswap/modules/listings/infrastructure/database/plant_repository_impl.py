# 📄 File: plantswap/modules/listings/infrastructure/database/plant_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# The part that actually reads and writes plant listings in the hosted database.
# 🧪 Purpose (Technical Summary):
# Supabase implementation of PlantRepository over the `plants` table, mapping rows to Plant
# entities. Owner-scoped updates and deletes filter on both `id` and `user_id`.
# 🔗 Dependencies:
# supabase Client, SupabaseTable gateway, Plant domain model
# 🔄 Connected Modules / Calls From:
# listings presentation dependencies, exchanges presentation dependencies

import logging
from typing import Any, Dict, Iterable, List, Optional

from supabase import Client

from plantswap.shared.infrastructure.database import SupabaseTable

from ...domain.models.plant import Plant, PlantStatus
from ...domain.repositories.plant_repository import PlantRepository

logger = logging.getLogger(__name__)


class SupabasePlantRepository(PlantRepository):
    """PlantRepository backed by the `plants` table."""

    TABLE = "plants"

    def __init__(self, client: Client):
        self.table = SupabaseTable(client, self.TABLE)

    async def create(self, plant: Plant) -> Plant:
        row = await self.table.insert(plant.to_row())
        logger.debug(f"Inserted plant {row.get('id')}")
        return Plant.from_row(row)

    async def get_by_id(self, plant_id: str) -> Optional[Plant]:
        row = await self.table.select_one(id=plant_id)
        return Plant.from_row(row) if row else None

    async def get_many(self, plant_ids: Iterable[str]) -> List[Plant]:
        ids = list(dict.fromkeys(plant_ids))
        if not ids:
            return []
        rows = await self.table.select(in_={"id": ids})
        return [Plant.from_row(row) for row in rows]

    async def list_available(self) -> List[Plant]:
        rows = await self.table.select(eq={"status": PlantStatus.AVAILABLE.value})
        return [Plant.from_row(row) for row in rows]

    async def list_by_owner(
        self,
        owner_id: str,
        status: Optional[PlantStatus] = None
    ) -> List[Plant]:
        eq = {"user_id": owner_id}
        if status:
            eq["status"] = status.value
        rows = await self.table.select(eq=eq)
        return [Plant.from_row(row) for row in rows]

    async def update(self, plant_id: str, owner_id: str, values: Dict[str, Any]) -> Optional[Plant]:
        rows = await self.table.update(values, id=plant_id, user_id=owner_id)
        return Plant.from_row(rows[0]) if rows else None

    async def set_status(self, plant_id: str, status: PlantStatus) -> Optional[Plant]:
        rows = await self.table.update({"status": status.value}, id=plant_id)
        return Plant.from_row(rows[0]) if rows else None

    async def delete(self, plant_id: str, owner_id: str) -> bool:
        removed = await self.table.delete(id=plant_id, user_id=owner_id)
        return removed > 0
