"""
Organizer Routes
Event views, templates, certificate issuing, announcements and media for organizers
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from eventsphere.auth import get_organizer
from eventsphere.schemas.certificate import (
    TemplateResponse,
    IssueCertificatesRequest,
    IssueCertificatesResponse,
    CertificateListResponse,
    CertificateResponse
)
from eventsphere.schemas.event import EventResponse
from eventsphere.schemas.gallery import EventMediaResponse
from eventsphere.schemas.notification import (
    AnnouncementRequest,
    BroadcastNotificationRequest,
    BroadcastResponse,
    NotificationResponse
)
from eventsphere.schemas.registration import AttendanceReportResponse, RegistrationResponse
from eventsphere.services.attendance_service import attendance_service
from eventsphere.services.certificate_service import certificate_service
from eventsphere.services.dashboard_service import dashboard_service
from eventsphere.services.event_service import event_service
from eventsphere.services.media_service import media_service
from eventsphere.services.notification_service import notification_service
from eventsphere.services.template_service import template_service

router = APIRouter()


# Events

@router.get("/events", response_model=List[EventResponse])
async def list_my_events(
    event_type: Optional[str] = Query(None, alias="type", pattern="^(upcoming|past)$"),
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
    current_user: dict = Depends(get_organizer)
):
    """The organizer's active events"""
    return await dashboard_service.organizer_events(current_user, event_type, status_filter, limit)


@router.get("/registrations", response_model=List[RegistrationResponse])
async def list_registrations(
    event_id: Optional[UUID] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    current_user: dict = Depends(get_organizer)
):
    """Registrations across the organizer's events"""
    return await dashboard_service.organizer_registrations(
        current_user, str(event_id) if event_id else None, status_filter, limit
    )


@router.get("/events/{event_id}/attendance", response_model=AttendanceReportResponse)
async def attendance_report(
    event_id: UUID,
    current_user: dict = Depends(get_organizer)
):
    """Attendance summary and participant list for one event"""
    return await attendance_service.attendance_report(str(event_id), current_user)


@router.get("/dashboard/stats")
async def dashboard_stats(current_user: dict = Depends(get_organizer)):
    """Organizer dashboard numbers"""
    return await dashboard_service.organizer_stats(current_user)


# Certificate templates

@router.get("/certificate-templates", response_model=List[TemplateResponse])
async def list_templates(
    event_id: Optional[UUID] = Query(None),
    current_user: dict = Depends(get_organizer)
):
    """Own templates; with event_id also the global ones"""
    return await template_service.list_templates(current_user, str(event_id) if event_id else None)


@router.post("/certificate-templates", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def upload_template(
    name: str = Form(...),
    description: Optional[str] = Form(None),
    event_id: Optional[UUID] = Form(None),
    file: UploadFile = File(...),
    current_user: dict = Depends(get_organizer)
):
    """Upload a certificate template image or PDF"""
    content = await file.read()
    return await template_service.create_template(
        name=name,
        description=description,
        event_id=str(event_id) if event_id else None,
        content=content,
        content_type=file.content_type or "",
        current_user=current_user
    )


@router.delete("/certificate-templates/{template_id}")
async def delete_template(
    template_id: UUID,
    current_user: dict = Depends(get_organizer)
):
    """Delete a template (owner or admin)"""
    await template_service.delete_template(str(template_id), current_user)
    return {"message": "Template deleted successfully"}


# Certificates

@router.post("/certificates/issue", response_model=IssueCertificatesResponse, status_code=status.HTTP_201_CREATED)
async def issue_certificates(
    request: IssueCertificatesRequest,
    current_user: dict = Depends(get_organizer)
):
    """
    Batch issue certificates for an event

    - **event_id** / **template_id**: required
    - **participant_ids**: optional subset of registered users
    - **criteria.attendance_required**: only participants who checked in
    """
    return await certificate_service.issue_certificates(request, current_user)


@router.get("/certificates", response_model=CertificateListResponse)
async def list_issued_certificates(
    event_id: Optional[UUID] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    current_user: dict = Depends(get_organizer)
):
    """Certificates issued for the organizer's events"""
    certificates = await certificate_service.list_for_organizer(
        current_user, str(event_id) if event_id else None, status_filter, limit
    )
    return {"certificates": certificates, "total": len(certificates)}


@router.delete("/certificates/{cert_id}", response_model=CertificateResponse)
async def revoke_certificate(
    cert_id: UUID,
    current_user: dict = Depends(get_organizer)
):
    """Revoke a certificate; verification then answers 410"""
    return await certificate_service.revoke(str(cert_id), current_user)


# Notifications

@router.post("/events/{event_id}/announcement", response_model=BroadcastResponse, status_code=status.HTTP_201_CREATED)
async def send_announcement(
    event_id: UUID,
    request: AnnouncementRequest,
    current_user: dict = Depends(get_organizer)
):
    """Announce to everyone registered for (or attending) the event"""
    event = await event_service.get_event(str(event_id))
    event_service.ensure_can_manage(event, current_user)

    recipients = await notification_service.event_participant_ids(str(event_id))
    if not recipients:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No registered participants to notify"
        )

    count = await notification_service.notify_users(
        recipients,
        title=request.title,
        message=request.message,
        notification_type="announcement",
        priority=request.priority,
        event_id=str(event_id),
        created_by=current_user["user_id"]
    )
    return {"message": f"Announcement sent to {count} participants", "recipients": count}


@router.get("/notifications", response_model=List[NotificationResponse])
async def list_sent_notifications(current_user: dict = Depends(get_organizer)):
    """Notifications created by the organizer"""
    return await notification_service.list_created_by(current_user["user_id"])


@router.post("/notifications", response_model=BroadcastResponse, status_code=status.HTTP_201_CREATED)
async def broadcast_notification(
    request: BroadcastNotificationRequest,
    current_user: dict = Depends(get_organizer)
):
    """Fan out a notification to all users, a role group or a list of user ids"""
    if request.event_id:
        event = await event_service.get_event(str(request.event_id))
        event_service.ensure_can_manage(event, current_user)

    recipients = await notification_service.resolve_targets(request.target_users)
    if not recipients:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No target users found"
        )

    count = await notification_service.notify_users(
        recipients,
        title=request.title,
        message=request.message,
        notification_type=request.type,
        priority=request.priority,
        event_id=str(request.event_id) if request.event_id else None,
        created_by=current_user["user_id"]
    )
    return {"message": f"Notification sent to {count} users", "recipients": count}


# Media

@router.get("/media", response_model=List[EventMediaResponse])
async def list_media(
    event_id: Optional[UUID] = Query(None),
    current_user: dict = Depends(get_organizer)
):
    """Media attached to the organizer's events"""
    return await media_service.list_media(current_user, str(event_id) if event_id else None)


@router.post("/media", response_model=EventMediaResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(
    event_id: UUID = Form(...),
    caption: Optional[str] = Form(None),
    file: UploadFile = File(...),
    current_user: dict = Depends(get_organizer)
):
    """Attach an image to one of the organizer's events"""
    content = await file.read()
    return await media_service.upload(
        str(event_id), content, file.content_type or "", file.filename, caption, current_user
    )
