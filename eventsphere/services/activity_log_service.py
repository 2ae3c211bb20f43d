"""
Activity Logging Service
Handles activity log operations and queries
"""

import json
import logging
from datetime import datetime
from typing import List, Optional

from eventsphere.database import database
from eventsphere.models.types import new_id
from eventsphere.timeutils import utcnow

logger = logging.getLogger(__name__)


class ActivityLogService:
    """Service for activity logging operations"""

    @staticmethod
    async def log_activity(
        actor_id: Optional[str],
        action: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None,
        ip_address: Optional[str] = None
    ) -> str:
        """
        Log an activity

        Args:
            actor_id: User who performed the action
            action: Action type (e.g., 'approve_event', 'issue_certificates')
            resource_type: Type of resource affected (e.g., 'event', 'user')
            resource_id: ID of the resource
            details: Additional JSON details
            ip_address: IP address of the request

        Returns:
            ID of the created log entry
        """
        log_id = new_id()

        await database.execute(
            """
            INSERT INTO activity_logs (id, actor_id, action, resource_type, resource_id, details, ip_address, created_at)
            VALUES (:id, :actor_id, :action, :resource_type, :resource_id, :details, :ip_address, :created_at)
            """,
            {
                "id": log_id,
                "actor_id": str(actor_id) if actor_id else None,
                "action": action,
                "resource_type": resource_type,
                "resource_id": str(resource_id) if resource_id else None,
                "details": json.dumps(details, default=str) if details else None,
                "ip_address": ip_address,
                "created_at": utcnow()
            }
        )

        return log_id

    @staticmethod
    async def safe_log(*args, **kwargs) -> None:
        """Log an activity without letting audit failures break the request"""
        try:
            await ActivityLogService.log_activity(*args, **kwargs)
        except Exception:
            logger.warning("Failed to write activity log", exc_info=True)

    @staticmethod
    async def list_logs(
        limit: int = 50,
        offset: int = 0,
        action_filter: Optional[str] = None,
        actor_id: Optional[str] = None,
        since: Optional[datetime] = None
    ) -> tuple[List[dict], int]:
        """
        Get activity logs, newest first

        Returns:
            Tuple of (activity logs list, total count)
        """
        conditions = ["1 = 1"]
        params = {}

        if action_filter:
            conditions.append("action = :action")
            params["action"] = action_filter
        if actor_id:
            conditions.append("actor_id = :actor_id")
            params["actor_id"] = str(actor_id)
        if since:
            conditions.append("created_at >= :since")
            params["since"] = since

        where_clause = " AND ".join(conditions)

        count_query = f"SELECT COUNT(*) AS count FROM activity_logs WHERE {where_clause}"
        count_result = await database.fetch_one(count_query, params)
        total = count_result["count"] if count_result else 0

        query = f"""
        SELECT id, actor_id, action, resource_type, resource_id, details, ip_address, created_at
        FROM activity_logs
        WHERE {where_clause}
        ORDER BY created_at DESC
        LIMIT :limit OFFSET :offset
        """

        logs = await database.fetch_all(query, {**params, "limit": limit, "offset": offset})

        return [dict(log) for log in logs], total
