"""
Activity Log Model
Audit trail of administrative actions
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, func
from eventsphere.database import Base
from eventsphere.models.types import GUID, JSONType, new_id


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(GUID, primary_key=True, default=new_id)
    actor_id = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    action = Column(String(50), nullable=False, index=True)
    resource_type = Column(String(50), nullable=True)
    resource_id = Column(GUID, nullable=True)
    details = Column(JSONType, nullable=True)
    ip_address = Column(String(45), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), index=True)
