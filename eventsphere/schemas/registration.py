"""
Registration and Attendance Models
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from eventsphere.schemas.event import EventSummary


class RegistrationResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    event_id: UUID
    user_id: UUID
    user_name: str
    user_email: str
    user_department: Optional[str] = None
    status: str
    registration_date: Optional[datetime] = None
    attendance_time: Optional[datetime] = None
    qr_code_scanned: bool = False
    event_title: Optional[str] = None
    event_date: Optional[datetime] = None


class RegisterForEventResponse(BaseModel):
    message: str
    registration: RegistrationResponse


class CheckinRequest(BaseModel):
    qr_data: Optional[str] = Field(default=None, description="Scanned payload: event:<id>:checkin:<ms>")


class CheckinResponse(BaseModel):
    message: str
    event: EventSummary
    attendance_time: datetime


class AttendanceSummary(BaseModel):
    total_registered: int
    attended: int
    registered: int
    cancelled: int
    no_show: int
    attendance_rate: float


class AttendanceReportResponse(BaseModel):
    event: EventSummary
    summary: AttendanceSummary
    participants: List[RegistrationResponse]
