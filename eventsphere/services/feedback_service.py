"""
Feedback Service
Event ratings from participants
"""

import json
import logging
from typing import Optional

from fastapi import HTTPException, status

from eventsphere.database import database
from eventsphere.models.types import new_id
from eventsphere.schemas.feedback import CreateFeedbackRequest
from eventsphere.services.event_service import EventService
from eventsphere.timeutils import utcnow

logger = logging.getLogger(__name__)

CATEGORY_KEYS = ("organization", "content", "venue", "overall")


class FeedbackService:
    """Service for event feedback"""

    @staticmethod
    def _parse_categories(value) -> dict:
        if isinstance(value, str):
            return json.loads(value)
        return value or {}

    @staticmethod
    def _present(row: dict) -> dict:
        item = dict(row)
        item["categories"] = FeedbackService._parse_categories(item.get("categories"))
        if item.get("is_anonymous"):
            item["user_name"] = "Anonymous"
            item["user_id"] = None
        return item

    @staticmethod
    async def create_feedback(data: CreateFeedbackRequest, current_user: dict) -> dict:
        event = await EventService.get_event(data.event_id)

        existing = await database.fetch_one(
            "SELECT id FROM feedback WHERE event_id = :event_id AND user_id = :user_id",
            {"event_id": str(event["id"]), "user_id": str(current_user["user_id"])}
        )
        if existing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Feedback already submitted for this event"
            )

        provided = data.categories.model_dump()
        categories = {key: provided.get(key) or data.rating for key in CATEGORY_KEYS}

        feedback_id = new_id()
        await database.execute(
            """
            INSERT INTO feedback
            (id, event_id, user_id, user_name, rating, comment, categories, is_anonymous, is_moderated, created_at)
            VALUES (:id, :event_id, :user_id, :user_name, :rating, :comment, :categories, :is_anonymous, :is_moderated, :created_at)
            """,
            {
                "id": feedback_id,
                "event_id": str(event["id"]),
                "user_id": str(current_user["user_id"]),
                "user_name": current_user.get("name") or "Participant",
                "rating": data.rating,
                "comment": data.comment,
                "categories": json.dumps(categories),
                "is_anonymous": data.is_anonymous,
                "is_moderated": False,
                "created_at": utcnow()
            }
        )

        row = await database.fetch_one("SELECT * FROM feedback WHERE id = :id", {"id": feedback_id})
        result = FeedbackService._present(dict(row))
        result["event_title"] = event["title"]
        return result

    @staticmethod
    async def list_feedback(current_user: dict, event_id: Optional[str] = None, limit: int = 100) -> list:
        """Participants only see their own entries"""
        conditions = ["1 = 1"]
        params = {}
        if current_user["role"] == "participant":
            conditions.append("f.user_id = :user_id")
            params["user_id"] = str(current_user["user_id"])
        if event_id:
            conditions.append("f.event_id = :event_id")
            params["event_id"] = str(event_id)

        rows = await database.fetch_all(
            f"""
            SELECT f.*, e.title AS event_title
            FROM feedback f
            JOIN events e ON e.id = f.event_id
            WHERE {' AND '.join(conditions)}
            ORDER BY f.created_at DESC
            LIMIT :limit
            """,
            {**params, "limit": limit}
        )
        return [FeedbackService._present(dict(r)) for r in rows]

    @staticmethod
    async def summary(event_id: str) -> dict:
        """Average rating, rating histogram and per-category averages"""
        await EventService.get_event(event_id)

        rows = await database.fetch_all(
            "SELECT rating, categories FROM feedback WHERE event_id = :event_id",
            {"event_id": str(event_id)}
        )

        distribution = {str(n): 0 for n in range(1, 6)}
        totals = {key: 0 for key in CATEGORY_KEYS}
        for row in rows:
            distribution[str(row["rating"])] += 1
            categories = FeedbackService._parse_categories(row["categories"])
            for key in CATEGORY_KEYS:
                totals[key] += categories.get(key) or row["rating"]

        count = len(rows)
        average = round(sum(r["rating"] for r in rows) / count, 2) if count else 0.0

        return {
            "event_id": event_id,
            "total": count,
            "average_rating": average,
            "rating_distribution": distribution,
            "category_averages": {key: round(totals[key] / count, 2) if count else 0.0 for key in CATEGORY_KEYS},
        }


feedback_service = FeedbackService()
