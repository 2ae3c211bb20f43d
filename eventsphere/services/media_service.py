"""
Event Media Service
Photos organizers attach to their events
"""

from typing import Optional

from eventsphere.database import database
from eventsphere.models.types import new_id
from eventsphere.services.event_service import EventService
from eventsphere.services.gallery_service import GalleryService
from eventsphere.services.image_optimizer import ImageOptimizer
from eventsphere.services.storage_service import StorageService
from eventsphere.timeutils import utcnow


class MediaService:
    """Service for per-event media"""

    @staticmethod
    async def list_media(current_user: dict, event_id: Optional[str] = None) -> list:
        conditions = ["1 = 1"]
        params = {}
        if current_user["role"] != "admin":
            conditions.append("e.organizer_id = :organizer_id")
            params["organizer_id"] = str(current_user["user_id"])
        if event_id:
            conditions.append("m.event_id = :event_id")
            params["event_id"] = str(event_id)

        rows = await database.fetch_all(
            f"""
            SELECT m.* FROM event_media m
            JOIN events e ON e.id = m.event_id
            WHERE {' AND '.join(conditions)}
            ORDER BY m.uploaded_at DESC
            """,
            params
        )
        return [dict(r) for r in rows]

    @staticmethod
    async def upload(
        event_id: str,
        content: bytes,
        content_type: str,
        file_name: Optional[str],
        caption: Optional[str],
        current_user: dict
    ) -> dict:
        event = await EventService.get_event(event_id)
        EventService.ensure_can_manage(event, current_user)
        GalleryService.validate_image_upload(content, content_type)

        optimized, optimized_type = ImageOptimizer.optimize(content, content_type)
        media_id = new_id()
        url = await StorageService.upload_bytes(
            f"events/{event['id']}/{media_id}.{ImageOptimizer.extension_for(optimized_type)}",
            optimized,
            optimized_type
        )

        await database.execute(
            """
            INSERT INTO event_media (id, event_id, media_type, caption, url, file_name, file_size, uploaded_by, uploaded_at)
            VALUES (:id, :event_id, 'image', :caption, :url, :file_name, :file_size, :uploaded_by, :uploaded_at)
            """,
            {
                "id": media_id,
                "event_id": str(event["id"]),
                "caption": caption,
                "url": url,
                "file_name": file_name,
                "file_size": len(optimized),
                "uploaded_by": str(current_user["user_id"]),
                "uploaded_at": utcnow()
            }
        )

        row = await database.fetch_one("SELECT * FROM event_media WHERE id = :id", {"id": media_id})
        return dict(row)


media_service = MediaService()
