"""
Notification Model
Addressed to a single user, or to every user of a role when user_id is NULL
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text, func
from eventsphere.database import Base
from eventsphere.models.types import GUID, new_id


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(GUID, primary_key=True, default=new_id)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    target_role = Column(String(20), nullable=True)

    # event_update, registration_confirmed, event_reminder, certificate_ready, system, announcement
    type = Column(String(30), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    event_id = Column(GUID, ForeignKey("events.id", ondelete="SET NULL"), nullable=True)
    priority = Column(String(10), nullable=False, default="medium")

    is_read = Column(Boolean, default=False)
    expires_at = Column(DateTime, nullable=True)
    created_by = Column(GUID, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class NotificationRead(Base):
    """Read state of a role-wide notification, one row per reader"""
    __tablename__ = "notification_reads"

    notification_id = Column(GUID, ForeignKey("notifications.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    read_at = Column(DateTime, server_default=func.now())
