"""
Gallery and Event Media Models
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
from datetime import datetime
from uuid import UUID
import json

GALLERY_CATEGORIES = ("academic", "career", "cultural", "social", "sports", "technical")


class GalleryItemResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    title: str
    description: Optional[str] = None
    category: str
    image_url: str
    thumbnail_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    event_id: Optional[UUID] = None
    display_order: int = 0
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    uploaded_by: UUID
    uploaded_at: Optional[datetime] = None
    is_active: bool = True

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, v):
        if isinstance(v, str):
            return json.loads(v)
        return v or []


class GalleryListResponse(BaseModel):
    items: List[GalleryItemResponse]
    category_counts: Dict[str, int]
    total: int


class UpdateGalleryItemRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    display_order: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class EventMediaResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    event_id: UUID
    media_type: str
    caption: Optional[str] = None
    url: str
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    uploaded_by: UUID
    uploaded_at: Optional[datetime] = None
