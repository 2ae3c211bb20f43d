"""
Admin Routes
Analytics, event moderation, user management, gallery curation and audit logs
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from eventsphere.auth import get_admin
from eventsphere.schemas.activity_log import ActivityLogResponse
from eventsphere.schemas.auth import UpdateUserRequest, UserListResponse, UserResponse
from eventsphere.schemas.event import EventDecisionRequest, EventListResponse, EventResponse
from eventsphere.schemas.gallery import GalleryItemResponse, UpdateGalleryItemRequest
from eventsphere.services.activity_log_service import ActivityLogService
from eventsphere.services.analytics_service import analytics_service
from eventsphere.services.email_service import email_service
from eventsphere.services.event_service import event_service
from eventsphere.services.gallery_service import gallery_service
from eventsphere.services.notification_service import notification_service
from eventsphere.services.user_service import user_service

router = APIRouter()


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


@router.get("/analytics")
async def get_analytics(current_admin: dict = Depends(get_admin)):
    """Platform-wide user, event, registration and feedback numbers"""
    return await analytics_service.get_overview()


# Events

@router.get("/events", response_model=EventListResponse)
async def list_all_events(
    status_filter: str = Query("all", alias="status"),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    current_admin: dict = Depends(get_admin)
):
    """All active events regardless of status, newest first"""
    events, total = await event_service.list_events(
        status_filter=status_filter,
        search=search,
        page=page,
        limit=limit,
        sort_by="created",
        sort_order="desc"
    )
    return {"events": events, "pagination": event_service.pagination(page, limit, total)}


@router.get("/events/pending", response_model=List[EventResponse])
async def list_pending_events(current_admin: dict = Depends(get_admin)):
    """Events waiting for approval, oldest first"""
    return await event_service.list_pending()


@router.put("/events/{event_id}/approve", response_model=EventResponse)
async def approve_event(
    event_id: UUID,
    request: Request,
    decision: Optional[EventDecisionRequest] = None,
    current_admin: dict = Depends(get_admin)
):
    """Approve an event and notify its organizer"""
    decision = decision or EventDecisionRequest()
    event = await event_service.set_status(str(event_id), "approved")

    if event.get("organizer_id"):
        await notification_service.safe_notify_user(
            user_id=event["organizer_id"],
            title="Event Approved",
            message=decision.message or f'Your event "{event["title"]}" has been approved and is now live.',
            notification_type="event_update",
            event_id=str(event_id),
            priority="medium",
            created_by=current_admin["user_id"]
        )

    await ActivityLogService.safe_log(
        actor_id=current_admin["user_id"],
        action="approve_event",
        resource_type="event",
        resource_id=str(event_id),
        details={"title": event["title"]},
        ip_address=_client_ip(request)
    )
    return event


@router.put("/events/{event_id}/reject", response_model=EventResponse)
async def reject_event(
    event_id: UUID,
    request: Request,
    decision: Optional[EventDecisionRequest] = None,
    current_admin: dict = Depends(get_admin)
):
    """Reject an event with an optional reason and notify its organizer"""
    decision = decision or EventDecisionRequest()
    event = await event_service.set_status(str(event_id), "rejected", decision.reason)

    if event.get("organizer_id"):
        message = decision.message or f'Your event "{event["title"]}" has been rejected.'
        if decision.reason:
            message = f"{message} Reason: {decision.reason}"
        await notification_service.safe_notify_user(
            user_id=event["organizer_id"],
            title="Event Rejected",
            message=message,
            notification_type="event_update",
            event_id=str(event_id),
            priority="high",
            created_by=current_admin["user_id"]
        )

    await ActivityLogService.safe_log(
        actor_id=current_admin["user_id"],
        action="reject_event",
        resource_type="event",
        resource_id=str(event_id),
        details={"title": event["title"], "reason": decision.reason},
        ip_address=_client_ip(request)
    )
    return event


# Users

@router.get("/users", response_model=UserListResponse)
async def list_users(
    role: Optional[str] = Query(None, pattern="^(participant|organizer|admin)$"),
    status_filter: Optional[str] = Query(None, alias="status", pattern="^(pending|active|inactive)$"),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    current_admin: dict = Depends(get_admin)
):
    """Users with role/status/search filters; password hashes are never returned"""
    users, total = await user_service.list_users(role, status_filter, search, page, limit)
    return {"users": users, "pagination": event_service.pagination(page, limit, total)}


@router.put("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    data: UpdateUserRequest,
    request: Request,
    current_admin: dict = Depends(get_admin)
):
    """Edit a user; approving an organizer emails them"""
    user, previous = await user_service.update_user(str(user_id), data, current_admin["user_id"])

    if user["role"] == "organizer" and user["is_approved"] and not previous["is_approved"]:
        await email_service.send_organizer_approved_email(user["email"], user["name"])
        await notification_service.safe_notify_user(
            user_id=str(user["id"]),
            title="Account Approved",
            message="Your organizer account has been approved. You can now create events.",
            notification_type="system",
            created_by=current_admin["user_id"]
        )

    await ActivityLogService.safe_log(
        actor_id=current_admin["user_id"],
        action="update_user",
        resource_type="user",
        resource_id=str(user_id),
        details=data.model_dump(exclude_unset=True),
        ip_address=_client_ip(request)
    )
    return user


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: UUID,
    request: Request,
    current_admin: dict = Depends(get_admin)
):
    """Deactivate a user account"""
    user = await user_service.deactivate_user(str(user_id), current_admin["user_id"])

    await ActivityLogService.safe_log(
        actor_id=current_admin["user_id"],
        action="delete_user",
        resource_type="user",
        resource_id=str(user_id),
        details={"email": user["email"]},
        ip_address=_client_ip(request)
    )
    return {"message": "User deactivated successfully"}


# Gallery

@router.get("/gallery", response_model=List[GalleryItemResponse])
async def list_gallery(
    category: Optional[str] = Query(None),
    current_admin: dict = Depends(get_admin)
):
    """Every gallery item, including hidden ones"""
    return await gallery_service.list_all(category)


@router.post("/gallery", response_model=GalleryItemResponse, status_code=status.HTTP_201_CREATED)
async def upload_gallery_image(
    title: str = Form(...),
    category: str = Form(...),
    description: Optional[str] = Form(None),
    tags: Optional[str] = Form(None, description="Comma-separated"),
    event_id: Optional[UUID] = Form(None),
    file: UploadFile = File(...),
    current_admin: dict = Depends(get_admin)
):
    """Upload an image (max 10MB) to the public gallery"""
    content = await file.read()
    return await gallery_service.upload(
        title=title,
        category=category,
        content=content,
        content_type=file.content_type or "",
        file_name=file.filename,
        current_user=current_admin,
        description=description,
        tags=tags,
        event_id=str(event_id) if event_id else None
    )


@router.put("/gallery/{item_id}", response_model=GalleryItemResponse)
async def update_gallery_item(
    item_id: UUID,
    data: UpdateGalleryItemRequest,
    current_admin: dict = Depends(get_admin)
):
    """Edit gallery item details"""
    return await gallery_service.update(str(item_id), data)


@router.delete("/gallery/{item_id}")
async def delete_gallery_item(
    item_id: UUID,
    current_admin: dict = Depends(get_admin)
):
    """Remove a gallery item and its stored files"""
    await gallery_service.delete(str(item_id), current_admin)
    return {"message": "Gallery item deleted successfully"}


# Audit

@router.get("/activity-logs", response_model=ActivityLogResponse)
async def get_activity_logs(
    action: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    current_admin: dict = Depends(get_admin)
):
    """Audit trail of admin and organizer actions"""
    logs, total = await ActivityLogService.list_logs(limit=limit, offset=offset, action_filter=action)
    return {
        "logs": logs,
        "total": total,
        "limit": limit,
        "offset": offset,
        "has_more": offset + len(logs) < total
    }
