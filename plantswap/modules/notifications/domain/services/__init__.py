from .notification_rules import NOTIFICATION_RULES, notifications_for_transition
from .notification_service import NotificationService

__all__ = ["NOTIFICATION_RULES", "notifications_for_transition", "NotificationService"]
