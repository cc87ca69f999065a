# 📄 File: plantswap/modules/notifications/domain/models/notification.py
# 🧭 Purpose (Layman Explanation):
# Describes a little message in someone's inbox, like "Someone wants to exchange plants with you!",
# and whether they have read it yet.
# 🧪 Purpose (Technical Summary):
# Notification entity, its type enum and mapping to and from the `notifications` table row.
# 🔗 Dependencies:
# pydantic, datetime, typing, enum
# 🔄 Connected Modules / Calls From:
# notification_rules.py, notification_service.py, notification_repository_impl.py

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class NotificationType(str, Enum):
    """What the notification is about"""
    EXCHANGE_OFFER = "exchange_offer"
    EXCHANGE_PLANTS_SELECTED = "exchange_plants_selected"
    EXCHANGE_COMPLETED = "exchange_completed"
    EXCHANGE_CANCELLED = "exchange_cancelled"


class Notification(BaseModel):
    """
    Inbox entry for one user, created by the system as a side effect of an
    exchange transition and only ever marked read by its owner.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: Optional[str] = None
    user_id: str
    type: NotificationType
    message: str
    related_exchange_id: Optional[str] = None
    read: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Notification":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            type=row.get("type") or NotificationType.EXCHANGE_OFFER,
            message=row["message"],
            related_exchange_id=row.get("related_exchange_id"),
            read=bool(row.get("read")),
            created_at=row.get("created_at"),
        )

    def to_row(self) -> Dict[str, Any]:
        row = {
            "user_id": self.user_id,
            "type": self.type.value,
            "message": self.message,
            "related_exchange_id": self.related_exchange_id,
            "read": self.read,
        }
        if self.id:
            row["id"] = self.id
        return row
