# 📄 File: plantswap/modules/notifications/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands the inbox endpoints a ready-to-use notification service.
# 🧪 Purpose (Technical Summary):
# Module-specific FastAPI dependency providers for the notifications module.
# 🔗 Dependencies:
# FastAPI, supabase Client, plantswap.shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# plantswap.modules.notifications.presentation.api.v1.notifications

from fastapi import Depends
from supabase import Client

from plantswap.shared.core.dependencies import get_supabase

from ..domain.repositories.notification_repository import NotificationRepository
from ..domain.services.notification_service import NotificationService
from ..infrastructure.database.notification_repository_impl import SupabaseNotificationRepository


def get_notification_repository(client: Client = Depends(get_supabase)) -> NotificationRepository:
    return SupabaseNotificationRepository(client)


def get_notification_service(
    notification_repository: NotificationRepository = Depends(get_notification_repository),
) -> NotificationService:
    return NotificationService(notification_repository)
