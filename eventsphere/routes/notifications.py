"""
Notification Routes
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from eventsphere.auth import get_current_user, get_organizer
from eventsphere.schemas.notification import (
    CreateNotificationRequest,
    NotificationListResponse,
    NotificationResponse
)
from eventsphere.services.notification_service import notification_service

router = APIRouter()


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    unread_only: bool = Query(False),
    current_user: dict = Depends(get_current_user)
):
    """The caller's notifications plus role-wide ones, newest first"""
    notifications, unread_count = await notification_service.list_for_user(
        current_user["user_id"], current_user["role"], unread_only=unread_only
    )
    return {"notifications": notifications, "unread_count": unread_count}


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    request: CreateNotificationRequest,
    current_user: dict = Depends(get_organizer)
):
    """Send one notification to a user or to a whole role"""
    return await notification_service.create_notification(
        title=request.title,
        message=request.message,
        notification_type=request.type,
        priority=request.priority,
        user_id=str(request.user_id) if request.user_id else None,
        target_role=request.target_role,
        event_id=str(request.event_id) if request.event_id else None,
        created_by=current_user["user_id"],
        expires_at=request.expires_at
    )


@router.put("/read-all")
async def mark_all_read(current_user: dict = Depends(get_current_user)):
    """Mark every notification addressed to the caller as read"""
    await notification_service.mark_all_read(current_user["user_id"], current_user["role"])
    return {"message": "All notifications marked as read"}


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: UUID,
    current_user: dict = Depends(get_current_user)
):
    """Mark one notification as read"""
    return await notification_service.mark_read(
        str(notification_id), current_user["user_id"], current_user["role"]
    )
