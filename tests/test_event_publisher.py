"""In-process event delivery."""

import pytest

from plantswap.modules.exchanges.domain.events.exchange_events import ExchangeStatusChanged
from plantswap.modules.exchanges.domain.models.exchange import ExchangeOffer, ExchangeStatus
from plantswap.modules.notifications.domain.events.handlers import ExchangeNotificationHandler
from plantswap.shared.events import DomainEvent, EventHandler, EventPublisher


def _offer(status=ExchangeStatus.PENDING):
    return ExchangeOffer(
        id="offer-1",
        sender_id="sender",
        receiver_id="receiver",
        sender_plant_id="p1",
        receiver_plant_id="p2",
        status=status,
    )


class RecordingHandler(EventHandler):
    event_types = [ExchangeStatusChanged.EVENT_TYPE]

    def __init__(self):
        self.seen = []

    async def handle(self, event: DomainEvent) -> bool:
        self.seen.append(event)
        return True


class ExplodingHandler(EventHandler):
    event_types = [ExchangeStatusChanged.EVENT_TYPE]

    async def handle(self, event: DomainEvent) -> bool:
        raise RuntimeError("boom")


def test_event_carries_transition():
    event = ExchangeStatusChanged(_offer(ExchangeStatus.CANCELLED), ExchangeStatus.PENDING, "receiver")

    assert event.old_status == ExchangeStatus.PENDING
    assert event.new_status == ExchangeStatus.CANCELLED
    assert event.actor_id == "receiver"
    assert event.metadata.user_id == "receiver"
    assert event.to_dict()["data"]["offer_id"] == "offer-1"


def test_creation_event_has_no_old_status():
    assert ExchangeStatusChanged(_offer(), None, "sender").old_status is None


def test_event_requires_offer_id():
    with pytest.raises(ValueError):
        ExchangeStatusChanged(_offer().model_copy(update={"id": None}), None, "sender")


async def test_publish_reaches_subscribed_handlers():
    publisher = EventPublisher()
    handler = RecordingHandler()
    publisher.subscribe(handler)
    publisher.subscribe(handler)

    results = await publisher.publish(ExchangeStatusChanged(_offer(), None, "sender"))

    assert results == {"RecordingHandler": True}
    assert len(handler.seen) == 1


async def test_failing_handler_does_not_stop_others():
    publisher = EventPublisher()
    recorder = RecordingHandler()
    publisher.subscribe(ExplodingHandler())
    publisher.subscribe(recorder)

    results = await publisher.publish(ExchangeStatusChanged(_offer(), None, "sender"))

    assert results == {"ExplodingHandler": False, "RecordingHandler": True}
    assert len(recorder.seen) == 1


async def test_unsubscribe():
    publisher = EventPublisher()
    handler = RecordingHandler()
    publisher.subscribe(handler)
    publisher.unsubscribe(handler)

    assert await publisher.publish(ExchangeStatusChanged(_offer(), None, "sender")) == {}
    assert publisher.handlers_for(ExchangeStatusChanged.EVENT_TYPE) == []


async def test_notification_handler_writes_through_service(notification_service, notification_repo):
    handler = ExchangeNotificationHandler(lambda: notification_service)

    handled = await handler.handle(ExchangeStatusChanged(_offer(), None, "sender"))

    assert handled is True
    [notification] = notification_repo.notifications.values()
    assert notification.user_id == "receiver"
