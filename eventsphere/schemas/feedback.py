"""
Feedback Request/Response Models
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
from datetime import datetime
from uuid import UUID
import json


class FeedbackCategories(BaseModel):
    organization: Optional[int] = Field(default=None, ge=1, le=5)
    content: Optional[int] = Field(default=None, ge=1, le=5)
    venue: Optional[int] = Field(default=None, ge=1, le=5)
    overall: Optional[int] = Field(default=None, ge=1, le=5)


class CreateFeedbackRequest(BaseModel):
    event_id: UUID
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)
    categories: FeedbackCategories = Field(default_factory=FeedbackCategories)
    is_anonymous: bool = False


class FeedbackResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    event_id: UUID
    user_id: Optional[UUID] = None
    user_name: str
    rating: int
    comment: Optional[str] = None
    categories: Dict[str, int]
    is_anonymous: bool = False
    created_at: Optional[datetime] = None
    event_title: Optional[str] = None

    @field_validator("categories", mode="before")
    @classmethod
    def parse_categories(cls, v):
        if isinstance(v, str):
            return json.loads(v)
        return v


class FeedbackListResponse(BaseModel):
    feedback: List[FeedbackResponse]
    total: int


class FeedbackSummaryResponse(BaseModel):
    event_id: UUID
    total: int
    average_rating: float
    rating_distribution: Dict[str, int]
    category_averages: Dict[str, float]
