"""
Notification Service
In-app notifications and fan-out to user sets
"""

import logging
from typing import Iterable, List, Optional, Union

from fastapi import HTTPException, status

from eventsphere.database import database
from eventsphere.models.types import new_id
from eventsphere.timeutils import as_naive_utc, utcnow

logger = logging.getLogger(__name__)

INSERT_NOTIFICATION = """
INSERT INTO notifications
(id, user_id, target_role, type, title, message, event_id, priority, is_read, expires_at, created_by, created_at)
VALUES (:id, :user_id, :target_role, :type, :title, :message, :event_id, :priority, :is_read, :expires_at, :created_by, :created_at)
"""

ROLE_GROUPS = {
    "participants": "participant",
    "organizers": "organizer",
}


class NotificationService:
    """Service for notifications"""

    @staticmethod
    def _values(
        user_id: Optional[str],
        title: str,
        message: str,
        notification_type: str,
        priority: str,
        event_id: Optional[str],
        created_by: Optional[str],
        target_role: Optional[str] = None,
        expires_at=None
    ) -> dict:
        return {
            "id": new_id(),
            "user_id": str(user_id) if user_id else None,
            "target_role": target_role,
            "type": notification_type,
            "title": title,
            "message": message,
            "event_id": str(event_id) if event_id else None,
            "priority": priority,
            "is_read": False,
            "expires_at": as_naive_utc(expires_at),
            "created_by": str(created_by) if created_by else None,
            "created_at": utcnow(),
        }

    @staticmethod
    async def create_notification(
        title: str,
        message: str,
        notification_type: str = "system",
        priority: str = "medium",
        user_id: Optional[str] = None,
        target_role: Optional[str] = None,
        event_id: Optional[str] = None,
        created_by: Optional[str] = None,
        expires_at=None
    ) -> dict:
        if not user_id and not target_role:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Either user_id or target_role is required"
            )

        values = NotificationService._values(
            user_id, title, message, notification_type, priority, event_id, created_by,
            target_role=target_role, expires_at=expires_at
        )
        await database.execute(INSERT_NOTIFICATION, values)
        return values

    @staticmethod
    async def notify_users(
        user_ids: Iterable[str],
        title: str,
        message: str,
        notification_type: str = "announcement",
        priority: str = "medium",
        event_id: Optional[str] = None,
        created_by: Optional[str] = None
    ) -> int:
        """Insert one notification per user; returns the number created"""
        rows = [
            NotificationService._values(uid, title, message, notification_type, priority, event_id, created_by)
            for uid in dict.fromkeys(str(u) for u in user_ids)
        ]
        if rows:
            await database.execute_many(INSERT_NOTIFICATION, rows)
        return len(rows)

    @staticmethod
    async def safe_notify_user(user_id: str, title: str, message: str, notification_type: str,
                               event_id: Optional[str] = None, priority: str = "medium",
                               created_by: Optional[str] = None) -> None:
        """Notify one user; failures are logged and never surface to the caller"""
        try:
            await NotificationService.create_notification(
                title=title,
                message=message,
                notification_type=notification_type,
                priority=priority,
                user_id=user_id,
                event_id=event_id,
                created_by=created_by
            )
        except Exception:
            logger.warning("Failed to create notification", exc_info=True, extra={"user_id": user_id})

    @staticmethod
    async def resolve_targets(target_users: Union[str, List]) -> List[str]:
        """Turn all/participants/organizers or an explicit id list into active user ids"""
        if isinstance(target_users, list):
            if not target_users:
                return []
            placeholders = ", ".join(f":id{i}" for i in range(len(target_users)))
            params = {f"id{i}": str(uid) for i, uid in enumerate(target_users)}
            rows = await database.fetch_all(
                f"SELECT id FROM users WHERE id IN ({placeholders}) AND is_active = :active",
                {**params, "active": True}
            )
        elif target_users in ROLE_GROUPS:
            rows = await database.fetch_all(
                "SELECT id FROM users WHERE role = :role AND is_active = :active",
                {"role": ROLE_GROUPS[target_users], "active": True}
            )
        else:
            rows = await database.fetch_all(
                "SELECT id FROM users WHERE is_active = :active",
                {"active": True}
            )
        return [str(r["id"]) for r in rows]

    @staticmethod
    async def event_participant_ids(event_id: str) -> List[str]:
        rows = await database.fetch_all(
            """
            SELECT user_id FROM registrations
            WHERE event_id = :event_id AND status IN ('registered', 'attended')
            """,
            {"event_id": str(event_id)}
        )
        return [str(r["user_id"]) for r in rows]

    @staticmethod
    async def list_for_user(user_id: str, role: str, unread_only: bool = False, limit: int = 50) -> tuple[list, int]:
        """
        Notifications addressed to the user plus role-wide ones, newest first

        Role-wide rows take their read state from notification_reads.

        Returns:
            Tuple of (notifications, unread count)
        """
        from_clause = """
            FROM notifications n
            LEFT JOIN notification_reads nr ON nr.notification_id = n.id AND nr.user_id = :user_id
            WHERE (n.user_id = :user_id OR (n.user_id IS NULL AND n.target_role = :role))
            AND (n.expires_at IS NULL OR n.expires_at > :now)
        """
        unread_clause = """
            AND ((n.user_id IS NOT NULL AND n.is_read = :unread)
                 OR (n.user_id IS NULL AND nr.notification_id IS NULL))
        """
        params = {"user_id": str(user_id), "role": role, "now": utcnow()}

        unread_count = await database.fetch_val(
            f"SELECT COUNT(*) {from_clause} {unread_clause}",
            {**params, "unread": False}
        )

        if unread_only:
            from_clause += unread_clause
            params["unread"] = False

        rows = await database.fetch_all(
            f"""
            SELECT n.id, n.user_id, n.target_role, n.type, n.title, n.message, n.event_id,
                   n.priority, n.expires_at, n.created_by, n.created_at,
                   CASE WHEN n.user_id IS NULL THEN nr.notification_id IS NOT NULL
                        ELSE n.is_read END AS is_read
            {from_clause}
            ORDER BY n.created_at DESC
            LIMIT :limit
            """,
            {**params, "limit": limit}
        )
        return [dict(r) for r in rows], unread_count or 0

    @staticmethod
    async def _record_read(notification_id: str, user_id: str) -> None:
        existing = await database.fetch_one(
            "SELECT 1 FROM notification_reads WHERE notification_id = :notification_id AND user_id = :user_id",
            {"notification_id": notification_id, "user_id": user_id}
        )
        if not existing:
            await database.execute(
                """
                INSERT INTO notification_reads (notification_id, user_id, read_at)
                VALUES (:notification_id, :user_id, :read_at)
                """,
                {"notification_id": notification_id, "user_id": user_id, "read_at": utcnow()}
            )

    @staticmethod
    async def mark_read(notification_id: str, user_id: str, role: str) -> dict:
        """Personal rows flip is_read; role-wide rows get a read record for this user"""
        row = await database.fetch_one(
            "SELECT * FROM notifications WHERE id = :id",
            {"id": str(notification_id)}
        )
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")

        if row["user_id"]:
            if str(row["user_id"]) != str(user_id):
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your notification")
            await database.execute(
                "UPDATE notifications SET is_read = :read WHERE id = :id",
                {"read": True, "id": str(notification_id)}
            )
        else:
            if row["target_role"] != role:
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your notification")
            await NotificationService._record_read(str(notification_id), str(user_id))

        result = dict(row)
        result["is_read"] = True
        return result

    @staticmethod
    async def mark_all_read(user_id: str, role: str) -> None:
        await database.execute(
            "UPDATE notifications SET is_read = :read WHERE user_id = :user_id AND is_read = :unread",
            {"read": True, "unread": False, "user_id": str(user_id)}
        )

        unread_broadcasts = await database.fetch_all(
            """
            SELECT n.id FROM notifications n
            LEFT JOIN notification_reads nr ON nr.notification_id = n.id AND nr.user_id = :user_id
            WHERE n.user_id IS NULL AND n.target_role = :role AND nr.notification_id IS NULL
            """,
            {"user_id": str(user_id), "role": role}
        )
        if unread_broadcasts:
            now = utcnow()
            await database.execute_many(
                """
                INSERT INTO notification_reads (notification_id, user_id, read_at)
                VALUES (:notification_id, :user_id, :read_at)
                """,
                [
                    {"notification_id": str(r["id"]), "user_id": str(user_id), "read_at": now}
                    for r in unread_broadcasts
                ]
            )

    @staticmethod
    async def list_created_by(user_id: str, limit: int = 100) -> list:
        rows = await database.fetch_all(
            """
            SELECT * FROM notifications
            WHERE created_by = :user_id
            ORDER BY created_at DESC
            LIMIT :limit
            """,
            {"user_id": str(user_id), "limit": limit}
        )
        return [dict(r) for r in rows]


notification_service = NotificationService()
