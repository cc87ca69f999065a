# 📄 File: plantswap/modules/notifications/domain/services/notification_service.py
# 🧭 Purpose (Layman Explanation):
# Runs each member's inbox: shows their messages, marks them read, counts unread ones, and writes
# new messages when an exchange moves forward.
# 🧪 Purpose (Technical Summary):
# Domain service for the notification feed and for generating notifications from exchange
# transitions via the rule table. Storing a generated notification never raises: failures are
# logged so the exchange transition that caused them stands.
# 🔗 Dependencies:
# NotificationRepository, notification_rules, shared exceptions
# 🔄 Connected Modules / Calls From:
# notifications API endpoints, ExchangeNotificationHandler

import logging
from typing import List, Optional

from plantswap.modules.exchanges.domain.models.exchange import ExchangeStatus
from plantswap.shared.core.dependencies import CurrentUser
from plantswap.shared.core.exceptions import NotFoundError, PlantSwapException

from ..models.notification import Notification
from ..repositories.notification_repository import NotificationRepository
from .notification_rules import notifications_for_transition

logger = logging.getLogger(__name__)


class NotificationService:
    """Notification feed and transition-driven notification generation."""

    def __init__(self, notification_repository: NotificationRepository):
        self.notification_repository = notification_repository

    # =========================================================================
    # FEED
    # =========================================================================

    async def list_for_user(self, actor: CurrentUser, unread_only: bool = False) -> List[Notification]:
        return await self.notification_repository.list_for_user(actor.user_id, unread_only)

    async def unread_count(self, actor: CurrentUser) -> int:
        return await self.notification_repository.count_unread(actor.user_id)

    async def mark_read(self, actor: CurrentUser, notification_id: str) -> Notification:
        """
        Mark one of the actor's notifications read.

        Raises:
            NotFoundError: Unknown id or a notification of another user
        """
        notification = await self.notification_repository.mark_read(notification_id, actor.user_id)
        if not notification:
            raise NotFoundError(
                f"Notification not found: {notification_id}",
                resource_type="notification",
                resource_id=notification_id,
            )
        return notification

    async def mark_all_read(self, actor: CurrentUser) -> int:
        updated = await self.notification_repository.mark_all_read(actor.user_id)
        logger.debug(f"Marked {updated} notification(s) read for {actor.user_id}")
        return updated

    # =========================================================================
    # GENERATION
    # =========================================================================

    async def notify_transition(
        self,
        offer_id: str,
        sender_id: str,
        receiver_id: str,
        actor_id: str,
        old_status: Optional[ExchangeStatus],
        new_status: ExchangeStatus,
    ) -> List[Notification]:
        """
        Append the notifications the rule table defines for a transition.

        Returns:
            The notifications that were stored
        """
        stored: List[Notification] = []
        for notification in notifications_for_transition(
            offer_id, sender_id, receiver_id, actor_id, old_status, new_status
        ):
            try:
                stored.append(await self.notification_repository.create(notification))
            except PlantSwapException as e:
                logger.error(
                    f"Failed to store {notification.type.value} notification "
                    f"for {notification.user_id}: {e.message}",
                    extra={"offer_id": offer_id},
                )

        if stored:
            logger.info(f"Exchange {offer_id}: {len(stored)} notification(s) sent")
        return stored
