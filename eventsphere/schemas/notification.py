"""
Notification Request/Response Models
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Literal, Union
from datetime import datetime
from uuid import UUID

NotificationType = Literal[
    "event_update", "registration_confirmed", "event_reminder",
    "certificate_ready", "system", "announcement"
]
Priority = Literal["low", "medium", "high"]


class CreateNotificationRequest(BaseModel):
    """Single notification addressed to a user or to every user of a role"""
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    type: NotificationType = "system"
    priority: Priority = "medium"
    user_id: Optional[UUID] = None
    target_role: Optional[Literal["participant", "organizer", "admin"]] = None
    event_id: Optional[UUID] = None
    expires_at: Optional[datetime] = None


class BroadcastNotificationRequest(BaseModel):
    """Fan-out to a user set"""
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    type: NotificationType = "announcement"
    priority: Priority = "medium"
    target_users: Union[Literal["all", "participants", "organizers"], List[UUID]] = "all"
    event_id: Optional[UUID] = None


class AnnouncementRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    priority: Priority = "medium"


class NotificationResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    user_id: Optional[UUID] = None
    target_role: Optional[str] = None
    type: str
    title: str
    message: str
    event_id: Optional[UUID] = None
    priority: str
    is_read: bool = False
    expires_at: Optional[datetime] = None
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None


class NotificationListResponse(BaseModel):
    notifications: List[NotificationResponse]
    unread_count: int


class BroadcastResponse(BaseModel):
    message: str
    recipients: int
