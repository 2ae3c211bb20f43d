"""
Event Routes
Public listing plus organizer management, registration and check-in QR codes
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from eventsphere.auth import get_organizer, get_participant
from eventsphere.schemas.event import (
    CreateEventRequest,
    UpdateEventRequest,
    EventResponse,
    EventListResponse,
    QRCodeResponse
)
from eventsphere.schemas.registration import RegisterForEventResponse
from eventsphere.services.event_service import event_service
from eventsphere.services.registration_service import registration_service

router = APIRouter()


@router.get("", response_model=EventListResponse)
async def list_events(
    category: Optional[str] = Query(None),
    department: Optional[str] = Query(None),
    status_filter: str = Query("approved", alias="status", description="Event status, or 'all'"),
    search: Optional[str] = Query(None, description="Matches title, description and organizer"),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    sort_by: str = Query("date", pattern="^(date|title|created)$"),
    sort_order: str = Query("asc", pattern="^(asc|desc)$")
):
    """List active events with filters and pagination"""
    events, total = await event_service.list_events(
        category=category,
        department=department,
        status_filter=status_filter,
        search=search,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order
    )
    return {"events": events, "pagination": event_service.pagination(page, limit, total)}


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: CreateEventRequest,
    current_user: dict = Depends(get_organizer)
):
    """
    Create an event (Organizer or Admin)

    Organizer events start as pending and need admin approval; admin events are approved.
    """
    return await event_service.create_event(request, current_user)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: UUID):
    """Event details with a live participant count"""
    return await event_service.get_event_details(str(event_id))


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    request: UpdateEventRequest,
    current_user: dict = Depends(get_organizer)
):
    """Update an event (owner or admin)"""
    return await event_service.update_event(str(event_id), request, current_user)


@router.delete("/{event_id}")
async def delete_event(
    event_id: UUID,
    current_user: dict = Depends(get_organizer)
):
    """Soft delete an event (owner or admin)"""
    await event_service.delete_event(str(event_id), current_user)
    return {"message": "Event deleted successfully"}


@router.post("/{event_id}/register", response_model=RegisterForEventResponse, status_code=status.HTTP_201_CREATED)
async def register_for_event(
    event_id: UUID,
    current_user: dict = Depends(get_participant)
):
    """Register the current participant"""
    registration = await registration_service.register(str(event_id), current_user)
    return {"message": "Successfully registered for event", "registration": registration}


@router.delete("/{event_id}/register")
async def cancel_registration(
    event_id: UUID,
    current_user: dict = Depends(get_participant)
):
    """Cancel the current participant's registration"""
    await registration_service.cancel(str(event_id), current_user)
    return {"message": "Registration cancelled successfully"}


@router.get("/{event_id}/qr-code", response_model=QRCodeResponse)
async def get_checkin_qr_code(
    event_id: UUID,
    current_user: dict = Depends(get_organizer)
):
    """Check-in QR code for an event (owner or admin), valid for 24 hours"""
    return await event_service.generate_checkin_qr(str(event_id), current_user)
