"""
Feedback Model
One rating per participant per event
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text, UniqueConstraint, func
from eventsphere.database import Base
from eventsphere.models.types import GUID, JSONType, new_id


class Feedback(Base):
    __tablename__ = "feedback"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_feedback_event_user"),
    )

    id = Column(GUID, primary_key=True, default=new_id)
    event_id = Column(GUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    user_name = Column(String(100), nullable=False)

    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    # {"organization": n, "content": n, "venue": n, "overall": n}
    categories = Column(JSONType, nullable=False)

    is_anonymous = Column(Boolean, default=False)
    is_moderated = Column(Boolean, default=False)
    moderator_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
