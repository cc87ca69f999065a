# 📄 File: plantswap/modules/notifications/domain/services/notification_rules.py
# 🧭 Purpose (Layman Explanation):
# A lookup table saying who gets told what whenever an exchange moves to a new step.
# 🧪 Purpose (Technical Summary):
# Table-driven map (old_status, new_status) -> [(recipient role, type, message)] and the
# function that expands a transition into concrete Notification entities.
# 🔗 Dependencies:
# Notification model, ExchangeStatus
# 🔄 Connected Modules / Calls From:
# NotificationService.notify_transition

from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple

from plantswap.modules.exchanges.domain.models.exchange import ExchangeStatus

from ..models.notification import Notification, NotificationType


class RecipientRole(str, Enum):
    SENDER = "sender"
    RECEIVER = "receiver"
    COUNTERPART = "counterpart"    # The party that did not act


class NotificationRule(NamedTuple):
    recipient: RecipientRole
    type: NotificationType
    message: str


OFFER_RECEIVED = "Someone wants to exchange plants with you!"
PLANTS_SELECTED = "Plants have been selected for your exchange offer. Please confirm the exchange."
EXCHANGE_COMPLETED = "Your exchange has been completed!"
EXCHANGE_CANCELLED = "Your exchange offer has been cancelled."

_CANCELLED_RULES = [
    NotificationRule(RecipientRole.COUNTERPART, NotificationType.EXCHANGE_CANCELLED, EXCHANGE_CANCELLED),
]

NOTIFICATION_RULES: Dict[Tuple[Optional[ExchangeStatus], ExchangeStatus], List[NotificationRule]] = {
    (None, ExchangeStatus.PENDING): [
        NotificationRule(RecipientRole.RECEIVER, NotificationType.EXCHANGE_OFFER, OFFER_RECEIVED),
    ],
    (ExchangeStatus.PENDING, ExchangeStatus.AWAITING_CONFIRMATION): [
        NotificationRule(RecipientRole.SENDER, NotificationType.EXCHANGE_PLANTS_SELECTED, PLANTS_SELECTED),
    ],
    (ExchangeStatus.AWAITING_CONFIRMATION, ExchangeStatus.COMPLETED): [
        NotificationRule(RecipientRole.SENDER, NotificationType.EXCHANGE_COMPLETED, EXCHANGE_COMPLETED),
        NotificationRule(RecipientRole.RECEIVER, NotificationType.EXCHANGE_COMPLETED, EXCHANGE_COMPLETED),
    ],
    (ExchangeStatus.PENDING, ExchangeStatus.CANCELLED): _CANCELLED_RULES,
    (ExchangeStatus.AWAITING_CONFIRMATION, ExchangeStatus.CANCELLED): _CANCELLED_RULES,
}


def resolve_recipient(role: RecipientRole, sender_id: str, receiver_id: str, actor_id: str) -> str:
    if role == RecipientRole.SENDER:
        return sender_id
    if role == RecipientRole.RECEIVER:
        return receiver_id
    return receiver_id if actor_id == sender_id else sender_id


def notifications_for_transition(
    offer_id: str,
    sender_id: str,
    receiver_id: str,
    actor_id: str,
    old_status: Optional[ExchangeStatus],
    new_status: ExchangeStatus,
) -> List[Notification]:
    """
    Notifications to append for one exchange transition.

    Returns:
        One unread notification per matching rule entry; empty for
        transitions without rules
    """
    rules = NOTIFICATION_RULES.get((old_status, new_status), [])
    return [
        Notification(
            user_id=resolve_recipient(rule.recipient, sender_id, receiver_id, actor_id),
            type=rule.type,
            message=rule.message,
            related_exchange_id=offer_id,
            read=False,
        )
        for rule in rules
    ]
