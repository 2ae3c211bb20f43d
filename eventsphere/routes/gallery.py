"""
Public Gallery Routes
"""

from typing import Optional

from fastapi import APIRouter, Query
from eventsphere.schemas.gallery import GalleryListResponse
from eventsphere.services.gallery_service import gallery_service

router = APIRouter()


@router.get("", response_model=GalleryListResponse)
async def list_gallery(
    category: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200)
):
    """Active gallery images with per-category counts"""
    return await gallery_service.list_public(category, limit)
