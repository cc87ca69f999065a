# 📄 File: plantswap/modules/exchanges/infrastructure/database/exchange_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# The part that actually reads and writes exchange offers in the hosted database.
# 🧪 Purpose (Technical Summary):
# Supabase implementation of ExchangeRepository over the `exchange_offers` table. Party lookups
# use a postgrest or-filter on sender_id / receiver_id.
# 🔗 Dependencies:
# supabase Client, SupabaseTable gateway, ExchangeOffer domain model
# 🔄 Connected Modules / Calls From:
# exchanges presentation dependencies

import logging
from typing import List, Optional

from supabase import Client

from plantswap.shared.core.exceptions import RepositoryError
from plantswap.shared.infrastructure.database import SupabaseTable

from ...domain.models.exchange import ExchangeOffer
from ...domain.repositories.exchange_repository import ExchangeRepository

logger = logging.getLogger(__name__)


class SupabaseExchangeRepository(ExchangeRepository):
    """ExchangeRepository backed by the `exchange_offers` table."""

    TABLE = "exchange_offers"

    def __init__(self, client: Client):
        self.table = SupabaseTable(client, self.TABLE)

    async def create(self, offer: ExchangeOffer) -> ExchangeOffer:
        row = await self.table.insert(offer.to_row())
        return ExchangeOffer.from_row(row)

    async def get_by_id(self, offer_id: str) -> Optional[ExchangeOffer]:
        row = await self.table.select_one(id=offer_id)
        return ExchangeOffer.from_row(row) if row else None

    async def list_for_user(self, user_id: str) -> List[ExchangeOffer]:
        rows = await self.table.select(or_=f"sender_id.eq.{user_id},receiver_id.eq.{user_id}")
        return [ExchangeOffer.from_row(row) for row in rows]

    async def save(self, offer: ExchangeOffer) -> ExchangeOffer:
        rows = await self.table.update(
            {
                "status": offer.status.value,
                "selected_plants_ids": list(offer.selected_plant_ids),
            },
            id=offer.id,
        )
        if not rows:
            logger.error(f"Exchange offer {offer.id} was not updated")
            raise RepositoryError(
                f"Exchange offer {offer.id} could not be saved",
                table=self.TABLE,
                operation="update",
            )
        return ExchangeOffer.from_row(rows[0])
