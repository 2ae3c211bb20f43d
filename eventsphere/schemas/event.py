"""
Event Request/Response Models
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID
import json


def _parse_json_list(v):
    if isinstance(v, str):
        try:
            return json.loads(v)
        except (json.JSONDecodeError, TypeError):
            return [v]
    return v


class CreateEventRequest(BaseModel):
    """Request to create an event"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=50)
    department: Optional[str] = Field(default=None, max_length=100)
    venue: str = Field(..., min_length=1, max_length=200)
    date: datetime = Field(..., description="Event start (UTC)")
    time: str = Field(..., min_length=1, max_length=20, description="Display time, e.g. 10:00")
    end_time: Optional[str] = Field(default=None, max_length=20)
    max_participants: Optional[int] = Field(default=None, ge=1)
    registration_deadline: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)
    requirements: Optional[str] = None
    prizes: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Intro to Rust Workshop",
                "description": "Hands-on systems programming session",
                "category": "technical",
                "department": "Computer Science",
                "venue": "Lab 3",
                "date": "2026-11-20T10:00:00",
                "time": "10:00",
                "max_participants": 40
            }
        }


class UpdateEventRequest(BaseModel):
    """Partial event update; only provided fields change"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1, max_length=50)
    department: Optional[str] = Field(default=None, max_length=100)
    venue: Optional[str] = Field(default=None, min_length=1, max_length=200)
    date: Optional[datetime] = None
    time: Optional[str] = Field(default=None, min_length=1, max_length=20)
    end_time: Optional[str] = Field(default=None, max_length=20)
    max_participants: Optional[int] = Field(default=None, ge=1)
    registration_deadline: Optional[datetime] = None
    tags: Optional[List[str]] = None
    requirements: Optional[str] = None
    prizes: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None


class EventDecisionRequest(BaseModel):
    """Optional note sent to the organizer with an approval or rejection"""
    message: Optional[str] = Field(default=None, max_length=1000)
    reason: Optional[str] = Field(default=None, max_length=1000)


class EventResponse(BaseModel):
    """Event details"""
    model_config = {"from_attributes": True}

    id: UUID
    title: str
    description: str
    category: str
    department: Optional[str] = None
    venue: str
    date: datetime
    time: str
    end_time: Optional[str] = None
    max_participants: Optional[int] = None
    current_participants: int = 0
    organizer_id: Optional[UUID] = None
    organizer_name: Optional[str] = None
    organizer_email: Optional[str] = None
    status: str
    registration_deadline: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)
    requirements: Optional[str] = None
    prizes: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    rejection_reason: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, v):
        return _parse_json_list(v) or []


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class EventListResponse(BaseModel):
    events: List[EventResponse]
    pagination: Pagination


class EventSummary(BaseModel):
    """Compact event view used by check-in and QR responses"""
    id: UUID
    title: str
    date: datetime
    time: str
    venue: str


class QRCodeResponse(BaseModel):
    qr_data: str
    qr_image: str = Field(..., description="Base64 PNG, usable as a data URI")
    event: EventSummary
    expires_at: datetime
