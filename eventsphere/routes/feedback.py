"""
Feedback Routes
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from eventsphere.auth import get_current_user, get_participant
from eventsphere.schemas.feedback import (
    CreateFeedbackRequest,
    FeedbackResponse,
    FeedbackListResponse,
    FeedbackSummaryResponse
)
from eventsphere.services.feedback_service import feedback_service

router = APIRouter()


@router.get("", response_model=FeedbackListResponse)
async def list_feedback(
    event_id: Optional[UUID] = Query(None),
    current_user: dict = Depends(get_current_user)
):
    """Participants see their own feedback, organizers and admins see all"""
    items = await feedback_service.list_feedback(current_user, str(event_id) if event_id else None)
    return {"feedback": items, "total": len(items)}


@router.post("", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    request: CreateFeedbackRequest,
    current_user: dict = Depends(get_participant)
):
    """Rate an event (once per participant)"""
    return await feedback_service.create_feedback(request, current_user)


@router.get("/summary", response_model=FeedbackSummaryResponse)
async def feedback_summary(
    event_id: UUID = Query(...),
    current_user: dict = Depends(get_current_user)
):
    """Aggregate ratings for an event"""
    return await feedback_service.summary(str(event_id))
