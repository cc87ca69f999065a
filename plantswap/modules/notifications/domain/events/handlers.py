# 📄 File: plantswap/modules/notifications/domain/events/handlers.py
# 🧭 Purpose (Layman Explanation):
# Listens for "an exchange moved forward" announcements and drops the matching messages
# into the inboxes of the people involved.
# 🧪 Purpose (Technical Summary):
# EventHandler subscribed to ExchangeStatusChanged that delegates to
# NotificationService.notify_transition. The service is obtained per event from a factory so
# the backend client is only created when the first event arrives.
# 🔗 Dependencies:
# plantswap.shared.events, ExchangeStatusChanged, NotificationService
# 🔄 Connected Modules / Calls From:
# plantswap.main (registration at startup), EventPublisher

import logging
from typing import Callable

from plantswap.modules.exchanges.domain.events.exchange_events import ExchangeStatusChanged
from plantswap.shared.events.base import DomainEvent, EventHandler
from plantswap.shared.events.publisher import EventPublisher

from ..services.notification_service import NotificationService

logger = logging.getLogger(__name__)

NotificationServiceFactory = Callable[[], NotificationService]


class ExchangeNotificationHandler(EventHandler):
    """Creates notifications for exchange status changes."""

    event_types = [ExchangeStatusChanged.EVENT_TYPE]

    def __init__(self, service_factory: NotificationServiceFactory):
        self.service_factory = service_factory

    async def handle(self, event: DomainEvent) -> bool:
        if not isinstance(event, ExchangeStatusChanged):
            logger.warning(f"Unexpected event for {self.get_handler_name()}: {event}")
            return False

        await self.service_factory().notify_transition(
            offer_id=event.offer_id,
            sender_id=event.sender_id,
            receiver_id=event.receiver_id,
            actor_id=event.actor_id,
            old_status=event.old_status,
            new_status=event.new_status,
        )
        return True


def register_notification_handlers(
    publisher: EventPublisher,
    service_factory: NotificationServiceFactory
) -> ExchangeNotificationHandler:
    """Subscribe the notification handler to exchange events."""
    handler = ExchangeNotificationHandler(service_factory)
    publisher.subscribe(handler)
    logger.info("Notification handlers registered")
    return handler
