# 📄 File: plantswap/modules/profiles/domain/repositories/profile_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how member profiles are saved, found and changed in the database.
# 🧪 Purpose (Technical Summary):
# Repository interface for Profile entities following the Repository pattern.
# 🔗 Dependencies:
# Domain models (Profile), typing, abc
# 🔄 Connected Modules / Calls From:
# ProfileService, ExchangeService (details view), infrastructure implementation, test fakes

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from ..models.profile import Profile


class ProfileRepository(ABC):
    """
    Repository interface for Profile entity data access operations.

    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - Methods return domain entities (Profile), not rows
    """

    @abstractmethod
    async def create(self, profile: Profile) -> Profile:
        """
        Create a new profile.

        Args:
            profile: Profile entity to create

        Returns:
            Created Profile entity with created_at populated

        Raises:
            RepositoryError: If the backend operation fails
        """
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[Profile]:
        """
        Get profile by user ID.

        Args:
            user_id: Owning user id (= profile id)

        Returns:
            Profile entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[Profile]:
        """Get profile by exact username."""
        pass

    @abstractmethod
    async def get_many(self, user_ids: Iterable[str]) -> List[Profile]:
        """Profiles for the given user ids; missing ids are skipped."""
        pass

    @abstractmethod
    async def update(self, user_id: str, values: Dict[str, Any]) -> Optional[Profile]:
        """
        Update fields of a profile.

        Returns:
            Updated Profile, None if no profile exists for the user
        """
        pass
