"""Transition -> notification rule table."""

import pytest

from plantswap.modules.exchanges.domain.models.exchange import ExchangeStatus
from plantswap.modules.notifications.domain.models.notification import NotificationType
from plantswap.modules.notifications.domain.services.notification_rules import (
    EXCHANGE_CANCELLED,
    EXCHANGE_COMPLETED,
    NOTIFICATION_RULES,
    OFFER_RECEIVED,
    PLANTS_SELECTED,
    notifications_for_transition,
)

SENDER = "sender-1"
RECEIVER = "receiver-1"


def _for(old, new, actor):
    return notifications_for_transition("offer-1", SENDER, RECEIVER, actor, old, new)


def test_new_offer_notifies_receiver():
    [notification] = _for(None, ExchangeStatus.PENDING, SENDER)

    assert notification.user_id == RECEIVER
    assert notification.type == NotificationType.EXCHANGE_OFFER
    assert notification.message == OFFER_RECEIVED
    assert notification.related_exchange_id == "offer-1"
    assert notification.read is False


def test_selection_notifies_sender():
    [notification] = _for(ExchangeStatus.PENDING, ExchangeStatus.AWAITING_CONFIRMATION, RECEIVER)

    assert notification.user_id == SENDER
    assert notification.message == PLANTS_SELECTED


@pytest.mark.parametrize("actor", [SENDER, RECEIVER])
def test_completion_notifies_both_parties(actor):
    notifications = _for(ExchangeStatus.AWAITING_CONFIRMATION, ExchangeStatus.COMPLETED, actor)

    assert sorted(n.user_id for n in notifications) == sorted([SENDER, RECEIVER])
    assert {n.message for n in notifications} == {EXCHANGE_COMPLETED}


@pytest.mark.parametrize("old", [ExchangeStatus.PENDING, ExchangeStatus.AWAITING_CONFIRMATION])
@pytest.mark.parametrize("actor,expected", [(SENDER, RECEIVER), (RECEIVER, SENDER)])
def test_cancellation_notifies_the_other_party(old, actor, expected):
    [notification] = _for(old, ExchangeStatus.CANCELLED, actor)

    assert notification.user_id == expected
    assert notification.type == NotificationType.EXCHANGE_CANCELLED
    assert notification.message == EXCHANGE_CANCELLED


def test_transitions_without_rules_produce_nothing():
    assert _for(ExchangeStatus.COMPLETED, ExchangeStatus.CANCELLED, SENDER) == []
    assert (ExchangeStatus.PENDING, ExchangeStatus.COMPLETED) not in NOTIFICATION_RULES


def test_only_completion_has_more_than_one_recipient():
    multi = [key for key, rules in NOTIFICATION_RULES.items() if len(rules) > 1]
    assert multi == [(ExchangeStatus.AWAITING_CONFIRMATION, ExchangeStatus.COMPLETED)]
