"""
Event Service
Business logic for event listing, creation and management
"""

import json
import logging
import math
from datetime import timedelta
from typing import Optional

from fastapi import HTTPException, status

from eventsphere.config import settings
from eventsphere.database import database, like_pattern
from eventsphere.models.types import new_id
from eventsphere.schemas.event import CreateEventRequest, UpdateEventRequest
from eventsphere.services.qr_code import build_checkin_payload, render_qr_png
from eventsphere.timeutils import as_naive_utc, utcnow

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "date": "date",
    "title": "title",
    "created": "created_at",
}

UPDATABLE_FIELDS = (
    "title", "description", "category", "department", "venue", "date", "time", "end_time",
    "max_participants", "registration_deadline", "tags", "requirements", "prizes",
    "contact_email", "contact_phone",
)


class EventService:
    """Service for event operations"""

    @staticmethod
    def event_summary(event: dict) -> dict:
        return {
            "id": event["id"],
            "title": event["title"],
            "date": event["date"],
            "time": event["time"],
            "venue": event["venue"],
        }

    @staticmethod
    async def count_registered(event_id: str) -> int:
        count = await database.fetch_val(
            "SELECT COUNT(*) FROM registrations WHERE event_id = :event_id AND status = 'registered'",
            {"event_id": str(event_id)}
        )
        return count or 0

    @staticmethod
    async def list_events(
        category: Optional[str] = None,
        department: Optional[str] = None,
        status_filter: Optional[str] = "approved",
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 12,
        sort_by: str = "date",
        sort_order: str = "asc"
    ) -> tuple[list, int]:
        """Public event listing; status 'all' disables the status filter"""
        conditions = ["is_active = :active"]
        params = {"active": True}

        if category:
            conditions.append("category = :category")
            params["category"] = category
        if department:
            conditions.append("department = :department")
            params["department"] = department
        if status_filter and status_filter != "all":
            conditions.append("status = :status")
            params["status"] = status_filter
        if search:
            conditions.append(
                "(LOWER(title) LIKE :search ESCAPE '!' OR LOWER(description) LIKE :search ESCAPE '!'"
                " OR LOWER(COALESCE(organizer_name, '')) LIKE :search ESCAPE '!')"
            )
            params["search"] = like_pattern(search)

        where_clause = " AND ".join(conditions)
        order_column = SORT_COLUMNS.get(sort_by, "date")
        direction = "DESC" if sort_order.lower() == "desc" else "ASC"

        total = await database.fetch_val(f"SELECT COUNT(*) FROM events WHERE {where_clause}", params)

        rows = await database.fetch_all(
            f"""
            SELECT * FROM events
            WHERE {where_clause}
            ORDER BY {order_column} {direction}
            LIMIT :limit OFFSET :offset
            """,
            {**params, "limit": limit, "offset": (page - 1) * limit}
        )

        return [dict(r) for r in rows], total or 0

    @staticmethod
    def pagination(page: int, limit: int, total: int) -> dict:
        return {"page": page, "limit": limit, "total": total, "pages": math.ceil(total / limit) if limit else 0}

    @staticmethod
    async def get_event(event_id: str, active_only: bool = True) -> dict:
        """Fetch an event or raise 404"""
        event = await database.fetch_one(
            "SELECT * FROM events WHERE id = :id",
            {"id": str(event_id)}
        )
        if not event or (active_only and not event["is_active"]):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found"
            )
        return dict(event)

    @staticmethod
    async def get_event_details(event_id: str) -> dict:
        """Event with current_participants recounted from live registrations"""
        event = await EventService.get_event(event_id)
        event["current_participants"] = await EventService.count_registered(event_id)
        return event

    @staticmethod
    def ensure_can_manage(event: dict, current_user: dict) -> None:
        """Admins manage every event, organizers only their own"""
        if current_user["role"] == "admin":
            return
        if event.get("organizer_id") and str(event["organizer_id"]) == str(current_user["user_id"]):
            return
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only manage your own events"
        )

    @staticmethod
    async def create_event(data: CreateEventRequest, current_user: dict) -> dict:
        now = utcnow()
        event_date = as_naive_utc(data.date)

        if event_date <= now:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Event date must be in the future"
            )

        deadline = as_naive_utc(data.registration_deadline) or event_date
        if deadline > event_date:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Registration deadline must be before event date"
            )

        event_id = new_id()
        event_status = "approved" if current_user["role"] == "admin" else "pending"

        await database.execute(
            """
            INSERT INTO events
            (id, title, description, category, department, venue, date, time, end_time,
             max_participants, current_participants, organizer_id, organizer_name, organizer_email,
             status, registration_deadline, tags, requirements, prizes, contact_email, contact_phone,
             is_active, created_at, updated_at)
            VALUES (:id, :title, :description, :category, :department, :venue, :date, :time, :end_time,
                    :max_participants, 0, :organizer_id, :organizer_name, :organizer_email,
                    :status, :registration_deadline, :tags, :requirements, :prizes, :contact_email, :contact_phone,
                    :is_active, :created_at, :updated_at)
            """,
            {
                "id": event_id,
                "title": data.title.strip(),
                "description": data.description,
                "category": data.category,
                "department": data.department or current_user.get("department"),
                "venue": data.venue,
                "date": event_date,
                "time": data.time,
                "end_time": data.end_time,
                "max_participants": data.max_participants,
                "organizer_id": str(current_user["user_id"]),
                "organizer_name": current_user.get("name"),
                "organizer_email": current_user.get("email"),
                "status": event_status,
                "registration_deadline": deadline,
                "tags": json.dumps(data.tags),
                "requirements": data.requirements,
                "prizes": data.prizes,
                "contact_email": data.contact_email or current_user.get("email"),
                "contact_phone": data.contact_phone,
                "is_active": True,
                "created_at": now,
                "updated_at": now
            }
        )

        logger.info("Event created with status %s", event_status, extra={"event_id": event_id})
        return await EventService.get_event(event_id)

    @staticmethod
    async def update_event(event_id: str, data: UpdateEventRequest, current_user: dict) -> dict:
        event = await EventService.get_event(event_id)

        # An organizer may take over an event that has no owner
        claim = not event.get("organizer_id") and current_user["role"] == "organizer"
        if not claim:
            EventService.ensure_can_manage(event, current_user)

        changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if k in UPDATABLE_FIELDS}

        if "date" in changes:
            if changes["date"] is None:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Event date is required")
            changes["date"] = as_naive_utc(changes["date"])
            if changes["date"] <= utcnow():
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Event date must be in the future"
                )

        if "registration_deadline" in changes:
            changes["registration_deadline"] = as_naive_utc(changes["registration_deadline"])

        effective_date = changes.get("date") or as_naive_utc(event["date"])
        effective_deadline = changes.get("registration_deadline", as_naive_utc(event["registration_deadline"]))
        if effective_deadline and effective_deadline > effective_date:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Registration deadline must be before event date"
            )

        if "tags" in changes:
            changes["tags"] = json.dumps(changes["tags"] or [])

        if claim:
            changes.update({
                "organizer_id": str(current_user["user_id"]),
                "organizer_name": current_user.get("name"),
                "organizer_email": current_user.get("email"),
            })

        if changes:
            set_clause = ", ".join(f"{field} = :{field}" for field in changes)
            await database.execute(
                f"UPDATE events SET {set_clause}, updated_at = :updated_at WHERE id = :id",
                {**changes, "updated_at": utcnow(), "id": str(event_id)}
            )

        return await EventService.get_event_details(event_id)

    @staticmethod
    async def delete_event(event_id: str, current_user: dict) -> None:
        """Soft delete"""
        event = await EventService.get_event(event_id)
        EventService.ensure_can_manage(event, current_user)

        await database.execute(
            "UPDATE events SET is_active = :inactive, updated_at = :now WHERE id = :id",
            {"inactive": False, "now": utcnow(), "id": str(event_id)}
        )

    @staticmethod
    async def generate_checkin_qr(event_id: str, current_user: dict) -> dict:
        event = await EventService.get_event(event_id)
        EventService.ensure_can_manage(event, current_user)

        now = utcnow()
        qr_data = build_checkin_payload(str(event["id"]), now)

        return {
            "qr_data": qr_data,
            "qr_image": render_qr_png(qr_data),
            "event": EventService.event_summary(event),
            "expires_at": now + timedelta(hours=settings.QR_CODE_MAX_AGE_HOURS),
        }

    @staticmethod
    async def list_pending(limit: int = 50) -> list:
        rows = await database.fetch_all(
            """
            SELECT * FROM events
            WHERE status = 'pending' AND is_active = :active
            ORDER BY created_at ASC
            LIMIT :limit
            """,
            {"active": True, "limit": limit}
        )
        return [dict(r) for r in rows]

    @staticmethod
    async def set_status(event_id: str, new_status: str, rejection_reason: Optional[str] = None) -> dict:
        event = await EventService.get_event(event_id)

        await database.execute(
            """
            UPDATE events
            SET status = :status, rejection_reason = :reason, updated_at = :now
            WHERE id = :id
            """,
            {"status": new_status, "reason": rejection_reason, "now": utcnow(), "id": str(event["id"])}
        )

        event.update({"status": new_status, "rejection_reason": rejection_reason})
        return event


event_service = EventService()
