"""
Media Models
Public gallery images and per-event media uploaded by organizers
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text, BigInteger, func
from eventsphere.database import Base
from eventsphere.models.types import GUID, JSONType, new_id


class GalleryMedia(Base):
    __tablename__ = "gallery_media"

    id = Column(GUID, primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(20), nullable=False, index=True)
    image_url = Column(Text, nullable=False)
    thumbnail_url = Column(Text, nullable=True)
    tags = Column(JSONType, nullable=True)
    event_id = Column(GUID, ForeignKey("events.id", ondelete="SET NULL"), nullable=True)
    display_order = Column(Integer, nullable=False, default=0)

    # File info
    file_name = Column(String(255), nullable=True)
    file_size = Column(BigInteger, nullable=True)
    mime_type = Column(String(100), nullable=True)

    uploaded_by = Column(GUID, ForeignKey("users.id"), nullable=False)
    uploaded_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    is_active = Column(Boolean, default=True)


class EventMedia(Base):
    __tablename__ = "event_media"

    id = Column(GUID, primary_key=True, default=new_id)
    event_id = Column(GUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    media_type = Column(String(20), nullable=False, default="image")
    caption = Column(Text, nullable=True)
    url = Column(Text, nullable=False)
    file_name = Column(String(255), nullable=True)
    file_size = Column(BigInteger, nullable=True)
    uploaded_by = Column(GUID, ForeignKey("users.id"), nullable=False)
    uploaded_at = Column(DateTime, server_default=func.now())
