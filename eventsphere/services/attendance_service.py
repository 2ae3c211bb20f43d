"""
Attendance Service
QR check-in and attendance reporting
"""

import logging
from datetime import timedelta

from fastapi import HTTPException, status

from eventsphere.config import settings
from eventsphere.database import database
from eventsphere.services.event_service import EventService
from eventsphere.services.qr_code import parse_checkin_payload, is_payload_expired
from eventsphere.timeutils import as_naive_utc, utcnow

logger = logging.getLogger(__name__)

REGISTRATION_STATUSES = ("registered", "attended", "cancelled", "no-show")


class AttendanceService:
    """Service for check-in and attendance"""

    @staticmethod
    async def check_in(qr_data: str, current_user: dict) -> dict:
        """
        Mark the current participant as attended from a scanned QR payload

        Accepted from CHECKIN_WINDOW_HOURS before the event start until the same span after it.
        """
        if not qr_data:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="QR code data is required"
            )

        payload = parse_checkin_payload(qr_data)
        if payload is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid QR code format"
            )

        now = utcnow()
        if is_payload_expired(payload, now=now):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="QR code has expired"
            )

        event = await database.fetch_one(
            "SELECT * FROM events WHERE id = :id AND is_active = :active AND status = 'approved'",
            {"id": payload.event_id, "active": True}
        )
        if not event:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found or not active"
            )
        event = dict(event)

        window = timedelta(hours=settings.CHECKIN_WINDOW_HOURS)
        if abs(now - as_naive_utc(event["date"])) > window:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Check-in is only available {settings.CHECKIN_WINDOW_HOURS} hours before and after event start time"
            )

        registration = await database.fetch_one(
            """
            SELECT * FROM registrations
            WHERE event_id = :event_id AND user_id = :user_id AND status IN ('registered', 'attended')
            """,
            {"event_id": payload.event_id, "user_id": str(current_user["user_id"])}
        )
        if not registration:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You are not registered for this event"
            )
        if registration["status"] == "attended":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Already checked in for this event"
            )

        await database.execute(
            """
            UPDATE registrations
            SET status = 'attended', attendance_time = :now, qr_code_scanned = :scanned
            WHERE id = :id
            """,
            {"now": now, "scanned": True, "id": str(registration["id"])}
        )

        logger.info("Participant checked in", extra={"event_id": payload.event_id, "user_id": current_user["user_id"]})

        return {
            "message": "Successfully checked in",
            "event": EventService.event_summary(event),
            "attendance_time": now,
        }

    @staticmethod
    async def list_attended(event_id: str, current_user: dict) -> list:
        event = await EventService.get_event(event_id)
        EventService.ensure_can_manage(event, current_user)

        rows = await database.fetch_all(
            """
            SELECT * FROM registrations
            WHERE event_id = :event_id AND status = 'attended'
            ORDER BY attendance_time ASC
            """,
            {"event_id": str(event_id)}
        )
        return [dict(r) for r in rows]

    @staticmethod
    async def attendance_report(event_id: str, current_user: dict) -> dict:
        """Counts by registration status plus the participant list"""
        event = await EventService.get_event(event_id)
        EventService.ensure_can_manage(event, current_user)

        rows = await database.fetch_all(
            """
            SELECT * FROM registrations
            WHERE event_id = :event_id
            ORDER BY registration_date ASC
            """,
            {"event_id": str(event_id)}
        )
        participants = [dict(r) for r in rows]

        counts = {s: 0 for s in REGISTRATION_STATUSES}
        for participant in participants:
            counts[participant["status"]] = counts.get(participant["status"], 0) + 1

        expected = counts["registered"] + counts["attended"] + counts["no-show"]
        rate = round(counts["attended"] / expected * 100, 2) if expected else 0.0

        return {
            "event": EventService.event_summary(event),
            "summary": {
                "total_registered": len(participants),
                "attended": counts["attended"],
                "registered": counts["registered"],
                "cancelled": counts["cancelled"],
                "no_show": counts["no-show"],
                "attendance_rate": rate,
            },
            "participants": participants,
        }


attendance_service = AttendanceService()
