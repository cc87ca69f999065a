# 📄 File: plantswap/modules/notifications/domain/repositories/notification_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for storing inbox messages and marking them read.
# 🧪 Purpose (Technical Summary):
# Repository interface for Notification entities; read-state changes are scoped by owner.
# 🔗 Dependencies:
# Notification model, typing, abc
# 🔄 Connected Modules / Calls From:
# NotificationService, infrastructure implementation, test fakes

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.notification import Notification


class NotificationRepository(ABC):
    """Repository interface for Notification data access operations."""

    @abstractmethod
    async def create(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    async def get_by_id(self, notification_id: str) -> Optional[Notification]:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str, unread_only: bool = False) -> List[Notification]:
        """Notifications of a user, newest first."""
        pass

    @abstractmethod
    async def mark_read(self, notification_id: str, user_id: str) -> Optional[Notification]:
        """Mark one notification of ``user_id`` read; None if it is not theirs."""
        pass

    @abstractmethod
    async def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of the user read; returns how many changed."""
        pass

    @abstractmethod
    async def count_unread(self, user_id: str) -> int:
        pass
