# 📄 File: plantswap/modules/notifications/presentation/api/schemas/notification_schemas.py
# 🧭 Purpose (Layman Explanation):
# Defines how inbox messages and unread counters look when sent to the app.
#
# 🧪 Purpose (Technical Summary):
# Pydantic response schemas for notification endpoints.
#
# 🔗 Dependencies:
# - pydantic for serialization
# - Notification domain model
#
# 🔄 Connected Modules / Calls From:
# - plantswap.modules.notifications.presentation.api.v1.notifications

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from plantswap.modules.notifications.domain.models.notification import Notification, NotificationType


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    type: NotificationType
    message: str
    related_exchange_id: Optional[str] = None
    read: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationResponse":
        return cls.model_validate(notification)


class NotificationListResponse(BaseModel):
    notifications: List[NotificationResponse]
    total: int
    unread: int


class UnreadCountResponse(BaseModel):
    unread: int


class MarkAllReadResponse(BaseModel):
    updated: int
