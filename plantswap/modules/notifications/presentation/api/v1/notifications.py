# 📄 File: plantswap/modules/notifications/presentation/api/v1/notifications.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for a member's inbox: read messages, see how many are new, mark them read.
#
# 🧪 Purpose (Technical Summary):
# FastAPI notification feed endpoints delegating to NotificationService.
#
# 🔗 Dependencies:
# - FastAPI router, Query parameters
# - plantswap.modules.notifications.presentation.dependencies
# - plantswap.modules.notifications.presentation.api.schemas.notification_schemas
#
# 🔄 Connected Modules / Calls From:
# - plantswap.api.v1.router (router inclusion)

"""
Notifications API Endpoints

Endpoints:
- GET /: Caller's notifications, newest first
- GET /unread-count: Number of unread notifications
- POST /{notification_id}/read: Mark one read
- POST /read-all: Mark all read
"""

from fastapi import APIRouter, Depends, Query

from plantswap.modules.notifications.domain.services.notification_service import NotificationService
from plantswap.modules.notifications.presentation.api.schemas.notification_schemas import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from plantswap.modules.notifications.presentation.dependencies import get_notification_service
from plantswap.shared.core.dependencies import CurrentUser, get_current_user

notifications_router = APIRouter()


@notifications_router.get(
    "",
    response_model=NotificationListResponse,
    summary="List my notifications",
)
async def list_notifications(
    unread_only: bool = Query(False, description="Only unread notifications"),
    current_user: CurrentUser = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> NotificationListResponse:
    notifications = await notification_service.list_for_user(current_user, unread_only)
    return NotificationListResponse(
        notifications=[NotificationResponse.from_domain(n) for n in notifications],
        total=len(notifications),
        unread=sum(1 for n in notifications if not n.read),
    )


@notifications_router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Count unread notifications",
)
async def unread_count(
    current_user: CurrentUser = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread=await notification_service.unread_count(current_user))


@notifications_router.post(
    "/read-all",
    response_model=MarkAllReadResponse,
    summary="Mark all notifications read",
)
async def mark_all_read(
    current_user: CurrentUser = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> MarkAllReadResponse:
    return MarkAllReadResponse(updated=await notification_service.mark_all_read(current_user))


@notifications_router.post(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    summary="Mark a notification read",
    responses={404: {"description": "Notification not found"}},
)
async def mark_read(
    notification_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    notification = await notification_service.mark_read(current_user, notification_id)
    return NotificationResponse.from_domain(notification)
