"""
Attendance Routes
QR check-in for participants, attendance lists for organizers
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from eventsphere.auth import get_organizer, get_participant
from eventsphere.schemas.registration import CheckinRequest, CheckinResponse, RegistrationResponse
from eventsphere.services.attendance_service import attendance_service

router = APIRouter()


@router.post("/checkin", response_model=CheckinResponse)
async def check_in(
    request: CheckinRequest,
    current_user: dict = Depends(get_participant)
):
    """Check in with the scanned event QR code"""
    return await attendance_service.check_in(request.qr_data, current_user)


@router.get("/{event_id}", response_model=List[RegistrationResponse])
async def list_attendance(
    event_id: UUID,
    current_user: dict = Depends(get_organizer)
):
    """Participants who checked in to an event"""
    return await attendance_service.list_attended(str(event_id), current_user)
