# 📄 File: plantswap/shared/events/publisher.py

# 🧭 Purpose (Layman Explanation):
# This file passes news of important happenings (like "an exchange was confirmed") to every part
# of the app that wants to react to it, such as the notification feed.

# 🧪 Purpose (Technical Summary):
# In-process event publisher: handlers subscribe to event types, publish() awaits each matching
# handler in subscription order. Handler failures are logged and isolated so a side effect can
# never fail the operation that raised the event.

# 🔗 Dependencies:
# - plantswap.shared.events.base (DomainEvent, EventHandler)
# - plantswap.shared.utils.logging (structured logging)

# 🔄 Connected Modules / Calls From:
# Called by: ExchangeService (status change events)
# Handlers: plantswap.modules.notifications.domain.events.handlers

from collections import defaultdict
from typing import DefaultDict, Dict, List

from plantswap.shared.events.base import DomainEvent, EventHandler
from plantswap.shared.utils.logging import get_logger

logger = get_logger(__name__)


class EventPublisher:
    """
    Dispatches domain events to subscribed handlers.
    """

    def __init__(self):
        self._handlers: DefaultDict[str, List[EventHandler]] = defaultdict(list)

    def subscribe(self, handler: EventHandler) -> None:
        """Register a handler for every event type it declares."""
        for event_type in handler.event_types:
            if handler not in self._handlers[event_type]:
                self._handlers[event_type].append(handler)
                logger.debug(f"Subscribed {handler.get_handler_name()} to {event_type}")

    def unsubscribe(self, handler: EventHandler) -> None:
        for handlers in self._handlers.values():
            if handler in handlers:
                handlers.remove(handler)

    def handlers_for(self, event_type: str) -> List[EventHandler]:
        return list(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> Dict[str, bool]:
        """
        Deliver an event to all of its handlers.

        Args:
            event: The event to deliver

        Returns:
            dict: handler name -> whether it processed the event
        """
        results: Dict[str, bool] = {}
        handlers = self.handlers_for(event.event_type)

        if not handlers:
            logger.debug(f"No handlers for event {event.event_type}")
            return results

        for handler in handlers:
            name = handler.get_handler_name()
            try:
                results[name] = bool(await handler.handle(event))
            except Exception as e:
                results[name] = False
                logger.error(
                    f"Handler {name} failed for {event.event_type}: {e}",
                    extra={'event_id': event.metadata.event_id, 'event_type': event.event_type},
                    exc_info=True,
                )

        logger.debug(
            f"Published {event.event_type}",
            extra={'event_id': event.metadata.event_id, 'handlers': results},
        )
        return results
