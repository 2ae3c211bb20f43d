"""
Analytics Service
Platform-wide numbers for the admin dashboard
"""

from eventsphere.database import database
from eventsphere.timeutils import start_of_month, utcnow
from datetime import timedelta


class AnalyticsService:
    """Service for admin analytics"""

    @staticmethod
    def _growth(current: int, previous: int) -> float:
        if not previous:
            return 100.0 if current else 0.0
        return round((current - previous) / previous * 100, 2)

    @staticmethod
    async def get_overview() -> dict:
        month_start = start_of_month()
        previous_month_start = start_of_month(month_start - timedelta(days=1))
        active = {"active": True}

        users = await database.fetch_one(
            """
            SELECT
                COUNT(*) AS total,
                COALESCE(SUM(CASE WHEN last_login >= :month_start THEN 1 ELSE 0 END), 0) AS active_this_month,
                COALESCE(SUM(CASE WHEN created_at >= :month_start THEN 1 ELSE 0 END), 0) AS new_this_month,
                COALESCE(SUM(CASE WHEN created_at >= :previous_start AND created_at < :month_start THEN 1 ELSE 0 END), 0) AS new_last_month,
                COALESCE(SUM(CASE WHEN role = 'organizer' AND is_approved = :pending THEN 1 ELSE 0 END), 0) AS pending_organizers
            FROM users
            WHERE is_active = :active
            """,
            {**active, "month_start": month_start, "previous_start": previous_month_start, "pending": False}
        )

        events = await database.fetch_one(
            """
            SELECT
                COUNT(*) AS total,
                COALESCE(SUM(CASE WHEN status = 'approved' THEN 1 ELSE 0 END), 0) AS approved,
                COALESCE(SUM(CASE WHEN status = 'pending' THEN 1 ELSE 0 END), 0) AS pending,
                COALESCE(SUM(CASE WHEN status = 'completed' OR (status = 'approved' AND date < :now) THEN 1 ELSE 0 END), 0) AS completed,
                COALESCE(SUM(CASE WHEN created_at >= :month_start THEN 1 ELSE 0 END), 0) AS this_month
            FROM events
            WHERE is_active = :active
            """,
            {**active, "now": utcnow(), "month_start": month_start}
        )

        registrations = await database.fetch_one(
            """
            SELECT
                COUNT(*) AS total,
                COALESCE(SUM(CASE WHEN registration_date >= :month_start THEN 1 ELSE 0 END), 0) AS this_month,
                COALESCE(SUM(CASE WHEN status = 'attended' THEN 1 ELSE 0 END), 0) AS attended
            FROM registrations
            WHERE status != 'cancelled'
            """,
            {"month_start": month_start}
        )

        feedback = await database.fetch_one(
            """
            SELECT
                COUNT(*) AS total,
                AVG(rating) AS average_rating,
                COALESCE(SUM(CASE WHEN created_at >= :month_start THEN 1 ELSE 0 END), 0) AS this_month
            FROM feedback
            """,
            {"month_start": month_start}
        )

        categories = await database.fetch_all(
            """
            SELECT category, COUNT(*) AS count FROM events
            WHERE is_active = :active
            GROUP BY category
            ORDER BY count DESC
            """,
            active
        )

        departments = await database.fetch_all(
            """
            SELECT department, COUNT(*) AS count FROM users
            WHERE is_active = :active AND department IS NOT NULL
            GROUP BY department
            ORDER BY count DESC
            """,
            active
        )

        registration_total = registrations["total"] or 0

        return {
            "users": {
                "total": users["total"] or 0,
                "active_this_month": users["active_this_month"] or 0,
                "new_this_month": users["new_this_month"] or 0,
                "growth": AnalyticsService._growth(users["new_this_month"] or 0, users["new_last_month"] or 0),
                "pending_organizers": users["pending_organizers"] or 0,
            },
            "events": {
                "total": events["total"] or 0,
                "approved": events["approved"] or 0,
                "pending": events["pending"] or 0,
                "completed": events["completed"] or 0,
                "this_month": events["this_month"] or 0,
            },
            "registrations": {
                "total": registration_total,
                "this_month": registrations["this_month"] or 0,
                "attendance_rate": round((registrations["attended"] or 0) / registration_total * 100, 2) if registration_total else 0.0,
            },
            "feedback": {
                "total": feedback["total"] or 0,
                "average_rating": round(float(feedback["average_rating"]), 2) if feedback["average_rating"] is not None else 0.0,
                "this_month": feedback["this_month"] or 0,
            },
            "category_distribution": [{"category": r["category"], "count": r["count"]} for r in categories],
            "department_distribution": [{"department": r["department"], "count": r["count"]} for r in departments],
        }


analytics_service = AnalyticsService()
