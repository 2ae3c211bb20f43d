"""
Participant Dashboard Routes
"""

from typing import List

from fastapi import APIRouter, Depends
from eventsphere.auth import get_participant
from eventsphere.schemas.event import EventResponse
from eventsphere.services.dashboard_service import dashboard_service

router = APIRouter()


@router.get("/stats")
async def participant_stats(current_user: dict = Depends(get_participant)):
    """Registrations, upcoming events, certificates and attendance counts"""
    return await dashboard_service.participant_stats(current_user["user_id"])


@router.get("/events", response_model=List[EventResponse])
async def upcoming_events(current_user: dict = Depends(get_participant)):
    """Upcoming events the participant is registered for"""
    return await dashboard_service.participant_upcoming_events(current_user["user_id"])
