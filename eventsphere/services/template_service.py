"""
Template Service
Business logic for certificate template management
"""

import logging
from typing import Optional

from fastapi import HTTPException, status

from eventsphere.config import settings
from eventsphere.database import database
from eventsphere.models.types import new_id
from eventsphere.services.activity_log_service import ActivityLogService
from eventsphere.services.event_service import EventService
from eventsphere.services.image_optimizer import ImageOptimizer
from eventsphere.services.storage_service import StorageService
from eventsphere.timeutils import utcnow

logger = logging.getLogger(__name__)


class TemplateService:
    """Service for template management operations"""

    @staticmethod
    def allowed_content_types() -> set:
        return {t.strip() for t in settings.ALLOWED_TEMPLATE_TYPES.split(",") if t.strip()}

    @staticmethod
    async def list_templates(current_user: dict, event_id: Optional[str] = None) -> list:
        """
        Templates owned by the caller (every template for admins)

        With event_id, only that event's templates plus global ones are returned.
        """
        conditions = ["is_active = :active"]
        params = {"active": True}

        if current_user["role"] != "admin":
            conditions.append("organizer_id = :organizer_id")
            params["organizer_id"] = str(current_user["user_id"])

        if event_id:
            conditions.append("(event_id = :event_id OR event_id IS NULL)")
            params["event_id"] = str(event_id)

        rows = await database.fetch_all(
            f"""
            SELECT * FROM certificate_templates
            WHERE {' AND '.join(conditions)}
            ORDER BY created_at DESC
            """,
            params
        )
        return [dict(r) for r in rows]

    @staticmethod
    async def get_template(template_id: str) -> dict:
        template = await database.fetch_one(
            "SELECT * FROM certificate_templates WHERE id = :id AND is_active = :active",
            {"id": str(template_id), "active": True}
        )
        if not template:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Template not found"
            )
        return dict(template)

    @staticmethod
    async def create_template(
        name: str,
        description: Optional[str],
        event_id: Optional[str],
        content: bytes,
        content_type: str,
        current_user: dict
    ) -> dict:
        """Validate and store the uploaded file, then record the template"""
        if not name or not name.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Template name is required")

        if not content:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Template file is required")

        if content_type not in TemplateService.allowed_content_types():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Template must be a PNG, JPEG or PDF file"
            )

        if len(content) > settings.MAX_UPLOAD_SIZE:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB"
            )

        if content_type.startswith("image/") and not ImageOptimizer.is_valid_image(content):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Template image could not be read")

        if event_id:
            event = await EventService.get_event(event_id)
            EventService.ensure_can_manage(event, current_user)

        template_id = new_id()
        extension = ImageOptimizer.extension_for(content_type)
        template_url = await StorageService.upload_bytes(
            f"templates/{current_user['user_id']}/{template_id}.{extension}",
            content,
            content_type
        )

        now = utcnow()
        await database.execute(
            """
            INSERT INTO certificate_templates
            (id, name, description, template_url, event_id, organizer_id, organizer_name, file_size_bytes,
             is_active, created_at, updated_at)
            VALUES (:id, :name, :description, :template_url, :event_id, :organizer_id, :organizer_name, :file_size_bytes,
                    :is_active, :created_at, :updated_at)
            """,
            {
                "id": template_id,
                "name": name.strip(),
                "description": description,
                "template_url": template_url,
                "event_id": str(event_id) if event_id else None,
                "organizer_id": str(current_user["user_id"]),
                "organizer_name": current_user.get("name"),
                "file_size_bytes": len(content),
                "is_active": True,
                "created_at": now,
                "updated_at": now
            }
        )

        await ActivityLogService.safe_log(
            actor_id=current_user["user_id"],
            action="create_template",
            resource_type="template",
            resource_id=template_id,
            details={"name": name.strip()}
        )

        return await TemplateService.get_template(template_id)

    @staticmethod
    async def delete_template(template_id: str, current_user: dict) -> None:
        """Deactivate the template; the file is removed once no certificate refers to it"""
        template = await TemplateService.get_template(template_id)

        if current_user["role"] != "admin" and str(template["organizer_id"]) != str(current_user["user_id"]):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only delete your own templates"
            )

        await database.execute(
            "UPDATE certificate_templates SET is_active = :inactive, updated_at = :now WHERE id = :id",
            {"inactive": False, "now": utcnow(), "id": str(template_id)}
        )

        in_use = await database.fetch_val(
            "SELECT COUNT(*) FROM certificates WHERE template_id = :id",
            {"id": str(template_id)}
        )
        if not in_use:
            await StorageService.safe_delete(template["template_url"])


template_service = TemplateService()
