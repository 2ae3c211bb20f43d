"""
Event and Registration Models
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text, UniqueConstraint, func
from eventsphere.database import Base
from eventsphere.models.types import GUID, JSONType, new_id


class Event(Base):
    __tablename__ = "events"

    id = Column(GUID, primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    department = Column(String(100), nullable=True, index=True)
    venue = Column(String(200), nullable=False)

    # Schedule; date holds the start instant, time/end_time are display strings
    date = Column(DateTime, nullable=False, index=True)
    time = Column(String(20), nullable=False)
    end_time = Column(String(20), nullable=True)
    registration_deadline = Column(DateTime, nullable=True)

    # Capacity
    max_participants = Column(Integer, nullable=True)
    current_participants = Column(Integer, nullable=False, default=0)

    # Organizer
    organizer_id = Column(GUID, ForeignKey("users.id"), nullable=True, index=True)
    organizer_name = Column(String(100), nullable=True)
    organizer_email = Column(String(255), nullable=True)

    # Details
    tags = Column(JSONType, nullable=True)
    requirements = Column(Text, nullable=True)
    prizes = Column(Text, nullable=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(50), nullable=True)

    # Status: pending, approved, rejected, cancelled, completed
    status = Column(String(20), nullable=False, default="pending", index=True)
    rejection_reason = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Registration(Base):
    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_registrations_event_user"),
    )

    id = Column(GUID, primary_key=True, default=new_id)
    event_id = Column(GUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Snapshot of the participant at registration time
    user_name = Column(String(100), nullable=False)
    user_email = Column(String(255), nullable=False)
    user_department = Column(String(100), nullable=True)

    # Status: registered, cancelled, attended, no-show
    status = Column(String(20), nullable=False, default="registered")
    registration_date = Column(DateTime, server_default=func.now())
    attendance_time = Column(DateTime, nullable=True)
    qr_code_scanned = Column(Boolean, default=False)
