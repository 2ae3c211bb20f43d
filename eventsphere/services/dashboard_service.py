"""
Dashboard Service
Personal statistics for participants and organizers
"""

from typing import Optional

from eventsphere.database import database
from eventsphere.timeutils import utcnow


class DashboardService:
    """Service for dashboard numbers"""

    @staticmethod
    async def participant_stats(user_id: str) -> dict:
        params = {"user_id": str(user_id)}

        total_registrations = await database.fetch_val(
            "SELECT COUNT(*) FROM registrations WHERE user_id = :user_id AND status != 'cancelled'",
            params
        )
        upcoming = await database.fetch_val(
            """
            SELECT COUNT(*) FROM registrations r
            JOIN events e ON e.id = r.event_id
            WHERE r.user_id = :user_id AND r.status = 'registered' AND e.is_active = :active AND e.date >= :now
            """,
            {**params, "active": True, "now": utcnow()}
        )
        certificates = await database.fetch_val(
            "SELECT COUNT(*) FROM certificates WHERE participant_id = :user_id AND status != 'revoked'",
            params
        )
        attended = await database.fetch_val(
            "SELECT COUNT(*) FROM registrations WHERE user_id = :user_id AND status = 'attended'",
            params
        )

        return {
            "total_registrations": total_registrations or 0,
            "upcoming_events": upcoming or 0,
            "certificates_earned": certificates or 0,
            "events_attended": attended or 0,
        }

    @staticmethod
    async def participant_upcoming_events(user_id: str, limit: int = 10) -> list:
        rows = await database.fetch_all(
            """
            SELECT e.* FROM events e
            JOIN registrations r ON r.event_id = e.id
            WHERE r.user_id = :user_id AND r.status = 'registered' AND e.is_active = :active AND e.date >= :now
            ORDER BY e.date ASC
            LIMIT :limit
            """,
            {"user_id": str(user_id), "active": True, "now": utcnow(), "limit": limit}
        )
        return [dict(r) for r in rows]

    @staticmethod
    async def organizer_events(
        current_user: dict,
        event_type: Optional[str] = None,
        status_filter: Optional[str] = None,
        limit: int = 50
    ) -> list:
        """Active events of the organizer; type is upcoming or past"""
        conditions = ["organizer_id = :organizer_id", "is_active = :active"]
        params = {"organizer_id": str(current_user["user_id"]), "active": True}

        if event_type == "upcoming":
            conditions.append("date >= :now")
            params["now"] = utcnow()
        elif event_type == "past":
            conditions.append("date < :now")
            params["now"] = utcnow()
        if status_filter:
            conditions.append("status = :status")
            params["status"] = status_filter

        direction = "DESC" if event_type == "past" else "ASC"
        rows = await database.fetch_all(
            f"""
            SELECT * FROM events
            WHERE {' AND '.join(conditions)}
            ORDER BY date {direction}
            LIMIT :limit
            """,
            {**params, "limit": limit}
        )
        return [dict(r) for r in rows]

    @staticmethod
    async def organizer_registrations(
        current_user: dict,
        event_id: Optional[str] = None,
        status_filter: Optional[str] = None,
        limit: int = 100
    ) -> list:
        conditions = ["e.organizer_id = :organizer_id", "e.is_active = :active"]
        params = {"organizer_id": str(current_user["user_id"]), "active": True}
        if event_id:
            conditions.append("r.event_id = :event_id")
            params["event_id"] = str(event_id)
        if status_filter:
            conditions.append("r.status = :status")
            params["status"] = status_filter

        rows = await database.fetch_all(
            f"""
            SELECT r.*, e.title AS event_title, e.date AS event_date
            FROM registrations r
            JOIN events e ON e.id = r.event_id
            WHERE {' AND '.join(conditions)}
            ORDER BY r.registration_date DESC
            LIMIT :limit
            """,
            {**params, "limit": limit}
        )
        return [dict(r) for r in rows]

    @staticmethod
    async def organizer_stats(current_user: dict) -> dict:
        params = {"organizer_id": str(current_user["user_id"]), "active": True}
        now = utcnow()

        event_counts = await database.fetch_one(
            """
            SELECT
                COUNT(*) AS total,
                COALESCE(SUM(CASE WHEN date >= :now THEN 1 ELSE 0 END), 0) AS upcoming,
                COALESCE(SUM(CASE WHEN date < :now THEN 1 ELSE 0 END), 0) AS past,
                COALESCE(SUM(CASE WHEN status = 'pending' THEN 1 ELSE 0 END), 0) AS pending
            FROM events
            WHERE organizer_id = :organizer_id AND is_active = :active
            """,
            {**params, "now": now}
        )

        registration_counts = await database.fetch_one(
            """
            SELECT
                COUNT(*) AS total,
                COALESCE(SUM(CASE WHEN r.status = 'attended' THEN 1 ELSE 0 END), 0) AS attended
            FROM registrations r
            JOIN events e ON e.id = r.event_id
            WHERE e.organizer_id = :organizer_id AND e.is_active = :active AND r.status != 'cancelled'
            """,
            params
        )

        average_rating = await database.fetch_val(
            """
            SELECT AVG(f.rating) FROM feedback f
            JOIN events e ON e.id = f.event_id
            WHERE e.organizer_id = :organizer_id AND e.is_active = :active
            """,
            params
        )

        certificates_issued = await database.fetch_val(
            """
            SELECT COUNT(*) FROM certificates c
            JOIN events e ON e.id = c.event_id
            WHERE e.organizer_id = :organizer_id AND c.status != 'revoked'
            """,
            {"organizer_id": params["organizer_id"]}
        )

        total_registrations = registration_counts["total"] or 0
        attended = registration_counts["attended"] or 0

        return {
            "total_events": event_counts["total"] or 0,
            "upcoming_events": event_counts["upcoming"] or 0,
            "past_events": event_counts["past"] or 0,
            "pending_events": event_counts["pending"] or 0,
            "total_registrations": total_registrations,
            "attendance_rate": round(attended / total_registrations * 100, 2) if total_registrations else 0.0,
            "average_rating": round(float(average_rating), 2) if average_rating is not None else 0.0,
            "certificates_issued": certificates_issued or 0,
        }


dashboard_service = DashboardService()
