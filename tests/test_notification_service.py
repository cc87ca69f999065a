"""Notification feed: listing, unread counts and read state."""

import pytest

from plantswap.modules.exchanges.domain.models.exchange import ExchangeStatus
from plantswap.shared.core.exceptions import NotFoundError


@pytest.fixture()
async def seeded(notification_service, alice, bob):
    await notification_service.notify_transition(
        "offer-1", alice.user_id, bob.user_id, alice.user_id, None, ExchangeStatus.PENDING
    )
    await notification_service.notify_transition(
        "offer-2", bob.user_id, alice.user_id, bob.user_id, None, ExchangeStatus.PENDING
    )
    await notification_service.notify_transition(
        "offer-2", bob.user_id, alice.user_id, alice.user_id,
        ExchangeStatus.PENDING, ExchangeStatus.CANCELLED,
    )


async def test_feed_is_newest_first_and_scoped_to_owner(notification_service, seeded, alice, bob):
    alice_feed = await notification_service.list_for_user(alice)
    bob_feed = await notification_service.list_for_user(bob)

    assert [n.related_exchange_id for n in alice_feed] == ["offer-2"]
    assert [n.related_exchange_id for n in bob_feed] == ["offer-2", "offer-1"]
    assert all(n.user_id == bob.user_id for n in bob_feed)


async def test_mark_read_updates_unread_count(notification_service, seeded, bob):
    assert await notification_service.unread_count(bob) == 2
    newest = (await notification_service.list_for_user(bob))[0]

    marked = await notification_service.mark_read(bob, newest.id)

    assert marked.read is True
    assert await notification_service.unread_count(bob) == 1
    assert newest.id not in [n.id for n in await notification_service.list_for_user(bob, unread_only=True)]


async def test_cannot_mark_someone_elses_notification(notification_service, seeded, alice, bob):
    bobs = await notification_service.list_for_user(bob)

    with pytest.raises(NotFoundError):
        await notification_service.mark_read(alice, bobs[0].id)


async def test_mark_all_read(notification_service, seeded, alice, bob):
    assert await notification_service.mark_all_read(bob) == 2
    assert await notification_service.unread_count(bob) == 0
    assert await notification_service.mark_all_read(bob) == 0
    # untouched
    assert await notification_service.unread_count(alice) == 1


async def test_storage_failures_are_swallowed(notification_service, notification_repo, alice, bob):
    notification_repo.fail_creates = True

    stored = await notification_service.notify_transition(
        "offer-1", alice.user_id, bob.user_id, alice.user_id,
        ExchangeStatus.AWAITING_CONFIRMATION, ExchangeStatus.COMPLETED,
    )

    assert stored == []
