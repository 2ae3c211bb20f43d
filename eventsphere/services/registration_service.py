"""
Registration Service
Participant sign-up and cancellation for events
"""

import logging
from datetime import timedelta

from fastapi import HTTPException, status

from eventsphere.config import settings
from eventsphere.database import database
from eventsphere.models.types import new_id
from eventsphere.services.event_service import EventService
from eventsphere.services.notification_service import NotificationService
from eventsphere.timeutils import as_naive_utc, utcnow

logger = logging.getLogger(__name__)


class RegistrationService:
    """Service for event registrations"""

    @staticmethod
    async def get_registration(event_id: str, user_id: str):
        row = await database.fetch_one(
            "SELECT * FROM registrations WHERE event_id = :event_id AND user_id = :user_id",
            {"event_id": str(event_id), "user_id": str(user_id)}
        )
        return dict(row) if row else None

    @staticmethod
    async def register(event_id: str, current_user: dict) -> dict:
        """
        Register the current participant for an approved event

        A cancelled registration is reactivated instead of inserting a second row.
        """
        event = await EventService.get_event(event_id)
        if event["status"] != "approved":
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found or not available for registration"
            )

        now = utcnow()
        deadline = as_naive_utc(event["registration_deadline"]) or as_naive_utc(event["date"])
        if now > deadline:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Registration deadline has passed"
            )

        existing = await RegistrationService.get_registration(event_id, current_user["user_id"])
        if existing and existing["status"] != "cancelled":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Already registered for this event"
            )

        if event["max_participants"]:
            registered = await EventService.count_registered(event_id)
            if registered >= event["max_participants"]:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Event is full"
                )

        if existing:
            registration_id = str(existing["id"])
            await database.execute(
                """
                UPDATE registrations
                SET status = 'registered', registration_date = :now, attendance_time = NULL, qr_code_scanned = :scanned
                WHERE id = :id
                """,
                {"now": now, "scanned": False, "id": registration_id}
            )
        else:
            user = await database.fetch_one(
                "SELECT name, email, department FROM users WHERE id = :id",
                {"id": str(current_user["user_id"])}
            )
            registration_id = new_id()
            await database.execute(
                """
                INSERT INTO registrations
                (id, event_id, user_id, user_name, user_email, user_department, registration_date, status, qr_code_scanned)
                VALUES (:id, :event_id, :user_id, :user_name, :user_email, :user_department, :now, 'registered', :scanned)
                """,
                {
                    "id": registration_id,
                    "event_id": str(event_id),
                    "user_id": str(current_user["user_id"]),
                    "user_name": user["name"] if user else current_user.get("name"),
                    "user_email": user["email"] if user else current_user.get("email"),
                    "user_department": user["department"] if user else current_user.get("department"),
                    "now": now,
                    "scanned": False
                }
            )

        await database.execute(
            "UPDATE events SET current_participants = current_participants + 1 WHERE id = :id",
            {"id": str(event_id)}
        )

        await NotificationService.safe_notify_user(
            user_id=current_user["user_id"],
            title="Registration Confirmed",
            message=f"You are registered for {event['title']}.",
            notification_type="registration_confirmed",
            event_id=event_id
        )

        logger.info("Participant registered", extra={"event_id": event_id, "user_id": current_user["user_id"]})

        registration = await database.fetch_one(
            "SELECT * FROM registrations WHERE id = :id",
            {"id": registration_id}
        )
        return dict(registration)

    @staticmethod
    async def cancel(event_id: str, current_user: dict) -> None:
        event = await EventService.get_event(event_id)

        registration = await RegistrationService.get_registration(event_id, current_user["user_id"])
        if not registration or registration["status"] != "registered":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Not registered for this event"
            )

        cutoff = as_naive_utc(event["date"]) - timedelta(hours=settings.CANCELLATION_CUTOFF_HOURS)
        if utcnow() > cutoff:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Cannot cancel registration less than {settings.CANCELLATION_CUTOFF_HOURS} hours before the event"
            )

        await database.execute(
            "UPDATE registrations SET status = 'cancelled' WHERE id = :id",
            {"id": str(registration["id"])}
        )
        await database.execute(
            """
            UPDATE events
            SET current_participants = CASE WHEN current_participants > 0 THEN current_participants - 1 ELSE 0 END
            WHERE id = :id
            """,
            {"id": str(event_id)}
        )


registration_service = RegistrationService()
