# 📄 File: plantswap/shared/events/base.py

# 🧭 Purpose (Layman Explanation):
# The shape of an "something just happened" announcement inside the app, for example an exchange
# moving to a new step, and the shape of the listeners that react to it.

# 🧪 Purpose (Technical Summary):
# DomainEvent and EventHandler base classes for in-process events. Event metadata picks up the
# current request id from the logging context so a notification write can be traced back to the
# HTTP call that caused it.

# 🔗 Dependencies:
# - plantswap.shared.utils.logging (request_id_var)
# - dataclasses, uuid, datetime

# 🔄 Connected Modules / Calls From:
# Subclassed by: plantswap.modules.exchanges.domain.events.exchange_events
# Handlers: plantswap.modules.notifications.domain.events.handlers
# Dispatched by: plantswap.shared.events.publisher.EventPublisher

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from plantswap.shared.utils.logging import request_id_var


def _current_request_id() -> Optional[str]:
    return request_id_var.get() or None


@dataclass
class EventMetadata:
    """Who raised an event, when, and during which request."""
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    source: str = "plantswap-api"
    user_id: Optional[str] = None
    request_id: Optional[str] = field(default_factory=_current_request_id)

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload['occurred_at'] = self.occurred_at.isoformat()
        return payload


class DomainEvent(ABC):
    """
    An immutable fact raised by a domain service after its change is stored.

    Subclasses fix ``event_type`` and check their payload in
    ``_validate_event_data``; keyword arguments that name a metadata field
    (``user_id``, ``request_id`` ...) override the defaults.
    """

    def __init__(
        self,
        event_type: str,
        data: Dict[str, Any],
        metadata: Optional[EventMetadata] = None,
        **metadata_fields
    ):
        if not event_type:
            raise ValueError("Event type is required")
        if not isinstance(data, dict):
            raise ValueError("Event data must be a dictionary")

        self.event_type = event_type
        self.data = data
        self.metadata = metadata or EventMetadata()
        for name, value in metadata_fields.items():
            if hasattr(self.metadata, name):
                setattr(self.metadata, name, value)

        self._validate_event_data()

    @abstractmethod
    def _validate_event_data(self):
        """Raise ValueError when the payload is incomplete."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'event_type': self.event_type,
            'data': self.data,
            'metadata': self.metadata.to_dict(),
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.event_type}, id={self.metadata.event_id})"


class EventHandler(ABC):
    """
    Reacts to the event types listed in ``event_types``.

    ``handle`` returns False when it did not process the event; raising is
    also tolerated, the publisher logs it and carries on.
    """

    event_types: List[str] = []

    @abstractmethod
    async def handle(self, event: DomainEvent) -> bool:
        ...

    def get_handler_name(self) -> str:
        return self.__class__.__name__
