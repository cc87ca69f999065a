# 📄 File: plantswap/modules/exchanges/domain/repositories/exchange_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how exchange offers are saved, found and updated.
# 🧪 Purpose (Technical Summary):
# Repository interface for ExchangeOffer entities.
# 🔗 Dependencies:
# Domain models (ExchangeOffer, ExchangeStatus), typing, abc
# 🔄 Connected Modules / Calls From:
# ExchangeService, infrastructure implementation, test fakes

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.exchange import ExchangeOffer


class ExchangeRepository(ABC):
    """
    Repository interface for ExchangeOffer data access operations.

    Implementation Notes:
    - Listing methods return newest offers first
    - ``save`` persists status and selection of an existing offer
    """

    @abstractmethod
    async def create(self, offer: ExchangeOffer) -> ExchangeOffer:
        """
        Store a new offer.

        Returns:
            Stored offer with id and created_at populated
        """
        pass

    @abstractmethod
    async def get_by_id(self, offer_id: str) -> Optional[ExchangeOffer]:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[ExchangeOffer]:
        """Offers where the user is sender or receiver, newest first."""
        pass

    @abstractmethod
    async def save(self, offer: ExchangeOffer) -> ExchangeOffer:
        """
        Persist status and selected plants of an existing offer.

        Raises:
            RepositoryError: If the offer could not be written
        """
        pass
