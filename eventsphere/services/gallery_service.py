"""
Gallery Service
Public photo gallery curated by admins
"""

import json
import logging
from typing import Optional

from fastapi import HTTPException, status

from eventsphere.config import settings
from eventsphere.database import database
from eventsphere.models.types import new_id
from eventsphere.schemas.gallery import GALLERY_CATEGORIES, UpdateGalleryItemRequest
from eventsphere.services.activity_log_service import ActivityLogService
from eventsphere.services.image_optimizer import ImageOptimizer
from eventsphere.services.storage_service import StorageService
from eventsphere.timeutils import utcnow

logger = logging.getLogger(__name__)


def parse_tags(raw: Optional[str]) -> list:
    """Comma-separated form value to a clean tag list"""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


class GalleryService:
    """Service for gallery media"""

    @staticmethod
    def validate_category(category: Optional[str]) -> None:
        if category not in GALLERY_CATEGORIES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid category. Must be one of: {', '.join(GALLERY_CATEGORIES)}"
            )

    @staticmethod
    def validate_image_upload(content: bytes, content_type: Optional[str]) -> None:
        if not content_type or not content_type.startswith("image/"):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only image files are allowed")
        if len(content) > settings.MAX_UPLOAD_SIZE:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB"
            )
        if not ImageOptimizer.is_valid_image(content):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is not a valid image")

    @staticmethod
    async def list_public(category: Optional[str] = None, limit: int = 50) -> dict:
        conditions = ["is_active = :active"]
        params = {"active": True}
        if category:
            conditions.append("category = :category")
            params["category"] = category

        rows = await database.fetch_all(
            f"""
            SELECT * FROM gallery_media
            WHERE {' AND '.join(conditions)}
            ORDER BY display_order ASC, uploaded_at DESC
            LIMIT :limit
            """,
            {**params, "limit": limit}
        )

        count_rows = await database.fetch_all(
            """
            SELECT category, COUNT(*) AS count FROM gallery_media
            WHERE is_active = :active
            GROUP BY category
            """,
            {"active": True}
        )
        category_counts = {c: 0 for c in GALLERY_CATEGORIES}
        category_counts.update({r["category"]: r["count"] for r in count_rows})

        items = [dict(r) for r in rows]
        return {"items": items, "category_counts": category_counts, "total": len(items)}

    @staticmethod
    async def list_all(category: Optional[str] = None, include_inactive: bool = True) -> list:
        conditions = ["1 = 1"]
        params = {}
        if category:
            conditions.append("category = :category")
            params["category"] = category
        if not include_inactive:
            conditions.append("is_active = :active")
            params["active"] = True

        rows = await database.fetch_all(
            f"""
            SELECT * FROM gallery_media
            WHERE {' AND '.join(conditions)}
            ORDER BY category ASC, display_order ASC, uploaded_at DESC
            """,
            params
        )
        return [dict(r) for r in rows]

    @staticmethod
    async def get_item(item_id: str) -> dict:
        row = await database.fetch_one("SELECT * FROM gallery_media WHERE id = :id", {"id": str(item_id)})
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Gallery item not found")
        return dict(row)

    @staticmethod
    async def upload(
        title: str,
        category: str,
        content: bytes,
        content_type: str,
        file_name: Optional[str],
        current_user: dict,
        description: Optional[str] = None,
        tags: Optional[str] = None,
        event_id: Optional[str] = None
    ) -> dict:
        """Optimize and store the image, then append it to its category"""
        if not title or not title.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")
        GalleryService.validate_category(category)
        GalleryService.validate_image_upload(content, content_type)

        optimized, optimized_type = ImageOptimizer.optimize(content, content_type)
        item_id = new_id()
        extension = ImageOptimizer.extension_for(optimized_type)

        image_url = await StorageService.upload_bytes(f"gallery/{category}/{item_id}.{extension}", optimized, optimized_type)
        thumbnail_url = await StorageService.upload_bytes(
            f"gallery/{category}/{item_id}_thumb.jpg", ImageOptimizer.make_thumbnail(optimized), "image/jpeg"
        )

        next_order = await database.fetch_val(
            "SELECT COALESCE(MAX(display_order), -1) + 1 FROM gallery_media WHERE category = :category",
            {"category": category}
        )

        now = utcnow()
        await database.execute(
            """
            INSERT INTO gallery_media
            (id, title, description, category, image_url, thumbnail_url, tags, event_id, display_order,
             file_name, file_size, mime_type, uploaded_by, uploaded_at, updated_at, is_active)
            VALUES (:id, :title, :description, :category, :image_url, :thumbnail_url, :tags, :event_id, :display_order,
                    :file_name, :file_size, :mime_type, :uploaded_by, :uploaded_at, :updated_at, :is_active)
            """,
            {
                "id": item_id,
                "title": title.strip(),
                "description": description,
                "category": category,
                "image_url": image_url,
                "thumbnail_url": thumbnail_url,
                "tags": json.dumps(parse_tags(tags)),
                "event_id": str(event_id) if event_id else None,
                "display_order": next_order or 0,
                "file_name": file_name,
                "file_size": len(optimized),
                "mime_type": optimized_type,
                "uploaded_by": str(current_user["user_id"]),
                "uploaded_at": now,
                "updated_at": now,
                "is_active": True
            }
        )

        await ActivityLogService.safe_log(
            actor_id=current_user["user_id"],
            action="upload_gallery_image",
            resource_type="gallery_media",
            resource_id=item_id,
            details={"title": title.strip(), "category": category}
        )

        return await GalleryService.get_item(item_id)

    @staticmethod
    async def update(item_id: str, data: UpdateGalleryItemRequest) -> dict:
        await GalleryService.get_item(item_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "category" in changes:
            GalleryService.validate_category(changes["category"])
        if "tags" in changes:
            changes["tags"] = json.dumps(changes["tags"])

        if changes:
            set_clause = ", ".join(f"{field} = :{field}" for field in changes)
            await database.execute(
                f"UPDATE gallery_media SET {set_clause}, updated_at = :updated_at WHERE id = :id",
                {**changes, "updated_at": utcnow(), "id": str(item_id)}
            )

        return await GalleryService.get_item(item_id)

    @staticmethod
    async def delete(item_id: str, current_user: dict) -> None:
        item = await GalleryService.get_item(item_id)

        await database.execute("DELETE FROM gallery_media WHERE id = :id", {"id": str(item_id)})
        await StorageService.safe_delete(item["image_url"])
        await StorageService.safe_delete(item["thumbnail_url"])

        await ActivityLogService.safe_log(
            actor_id=current_user["user_id"],
            action="delete_gallery_image",
            resource_type="gallery_media",
            resource_id=str(item_id),
            details={"title": item["title"]}
        )


gallery_service = GalleryService()
