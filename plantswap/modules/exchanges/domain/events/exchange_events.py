# 📄 File: plantswap/modules/exchanges/domain/events/exchange_events.py
# 🧭 Purpose (Layman Explanation):
# Announces that an exchange moved to a new step, so other parts of the app (like notifications)
# can tell the people involved.
# 🧪 Purpose (Technical Summary):
# Domain event raised after every persisted exchange status change, including creation
# (old status None -> pending).
# 🔗 Dependencies:
# plantswap.shared.events.base
# 🔄 Connected Modules / Calls From:
# ExchangeService (publisher), notifications event handler (subscriber)

from typing import Optional

from plantswap.shared.events.base import DomainEvent

from ..models.exchange import ExchangeOffer, ExchangeStatus


class ExchangeStatusChanged(DomainEvent):
    """
    Event fired when an exchange offer changes status.

    Triggers:
    - Notification generation for the parties
    """

    EVENT_TYPE = "exchange.status_changed"

    def __init__(
        self,
        offer: ExchangeOffer,
        old_status: Optional[ExchangeStatus],
        actor_id: str,
        **kwargs
    ):
        super().__init__(
            event_type=self.EVENT_TYPE,
            data={
                "offer_id": offer.id,
                "sender_id": offer.sender_id,
                "receiver_id": offer.receiver_id,
                "old_status": old_status.value if old_status else None,
                "new_status": offer.status.value,
                "actor_id": actor_id,
            },
            user_id=actor_id,
            **kwargs
        )

    def _validate_event_data(self):
        for key in ("offer_id", "sender_id", "receiver_id", "new_status", "actor_id"):
            if not self.data.get(key):
                raise ValueError(f"{key} is required for {self.event_type}")

    @property
    def offer_id(self) -> str:
        return self.data["offer_id"]

    @property
    def sender_id(self) -> str:
        return self.data["sender_id"]

    @property
    def receiver_id(self) -> str:
        return self.data["receiver_id"]

    @property
    def actor_id(self) -> str:
        return self.data["actor_id"]

    @property
    def old_status(self) -> Optional[ExchangeStatus]:
        value = self.data.get("old_status")
        return ExchangeStatus(value) if value else None

    @property
    def new_status(self) -> ExchangeStatus:
        return ExchangeStatus(self.data["new_status"])
