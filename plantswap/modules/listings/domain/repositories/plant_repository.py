# 📄 File: plantswap/modules/listings/domain/repositories/plant_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how plant listings are saved, found, changed and removed,
# without saying which database does the work.
# 🧪 Purpose (Technical Summary):
# Repository interface for Plant entities. Owner-scoped mutations take the owner id so
# implementations can filter on it; status changes from the exchange flow are unscoped.
# 🔗 Dependencies:
# Domain models (Plant, PlantStatus), typing, abc
# 🔄 Connected Modules / Calls From:
# PlantService, ExchangeService, infrastructure implementation, test fakes

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from ..models.plant import Plant, PlantStatus


class PlantRepository(ABC):
    """
    Repository interface for Plant entity data access operations.

    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - Methods return domain entities (Plant), not rows
    - Listing methods return newest plants first
    """

    @abstractmethod
    async def create(self, plant: Plant) -> Plant:
        """
        Store a new plant.

        Args:
            plant: Plant entity without id

        Returns:
            Stored Plant with id and created_at populated

        Raises:
            RepositoryError: If the backend operation fails
        """
        pass

    @abstractmethod
    async def get_by_id(self, plant_id: str) -> Optional[Plant]:
        """Get plant by ID, None if absent."""
        pass

    @abstractmethod
    async def get_many(self, plant_ids: Iterable[str]) -> List[Plant]:
        """Get the plants with the given ids; missing ids are skipped."""
        pass

    @abstractmethod
    async def list_available(self) -> List[Plant]:
        """All plants with status available, newest first."""
        pass

    @abstractmethod
    async def list_by_owner(
        self,
        owner_id: str,
        status: Optional[PlantStatus] = None
    ) -> List[Plant]:
        """
        Plants of one owner, newest first.

        Args:
            owner_id: Owning user
            status: Optional status filter
        """
        pass

    @abstractmethod
    async def update(self, plant_id: str, owner_id: str, values: Dict[str, Any]) -> Optional[Plant]:
        """
        Update fields of a plant owned by ``owner_id``.

        Returns:
            Updated Plant, None if no such plant belongs to the owner
        """
        pass

    @abstractmethod
    async def set_status(self, plant_id: str, status: PlantStatus) -> Optional[Plant]:
        """Change the status of a plant regardless of owner (exchange side effect)."""
        pass

    @abstractmethod
    async def delete(self, plant_id: str, owner_id: str) -> bool:
        """Delete a plant owned by ``owner_id``; True if a row was removed."""
        pass
