from .handlers import ExchangeNotificationHandler, register_notification_handlers

__all__ = ["ExchangeNotificationHandler", "register_notification_handlers"]
