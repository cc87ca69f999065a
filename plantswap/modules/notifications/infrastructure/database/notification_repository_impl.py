# 📄 File: plantswap/modules/notifications/infrastructure/database/notification_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# The part that actually stores inbox messages in the hosted database and flips them to read.
# 🧪 Purpose (Technical Summary):
# Supabase implementation of NotificationRepository over the `notifications` table. Read-state
# updates filter on user_id so users only touch their own rows.
# 🔗 Dependencies:
# supabase Client, SupabaseTable gateway, Notification domain model
# 🔄 Connected Modules / Calls From:
# notifications presentation dependencies, plantswap.main handler registration

from typing import List, Optional

from supabase import Client

from plantswap.shared.infrastructure.database import SupabaseTable

from ...domain.models.notification import Notification
from ...domain.repositories.notification_repository import NotificationRepository


class SupabaseNotificationRepository(NotificationRepository):
    """NotificationRepository backed by the `notifications` table."""

    TABLE = "notifications"

    def __init__(self, client: Client):
        self.table = SupabaseTable(client, self.TABLE)

    async def create(self, notification: Notification) -> Notification:
        row = await self.table.insert(notification.to_row())
        return Notification.from_row(row)

    async def get_by_id(self, notification_id: str) -> Optional[Notification]:
        row = await self.table.select_one(id=notification_id)
        return Notification.from_row(row) if row else None

    async def list_for_user(self, user_id: str, unread_only: bool = False) -> List[Notification]:
        eq = {"user_id": user_id}
        if unread_only:
            eq["read"] = False
        rows = await self.table.select(eq=eq)
        return [Notification.from_row(row) for row in rows]

    async def mark_read(self, notification_id: str, user_id: str) -> Optional[Notification]:
        rows = await self.table.update({"read": True}, id=notification_id, user_id=user_id)
        return Notification.from_row(rows[0]) if rows else None

    async def mark_all_read(self, user_id: str) -> int:
        rows = await self.table.update({"read": True}, user_id=user_id, read=False)
        return len(rows)

    async def count_unread(self, user_id: str) -> int:
        rows = await self.table.select(eq={"user_id": user_id, "read": False}, order_by=None)
        return len(rows)
