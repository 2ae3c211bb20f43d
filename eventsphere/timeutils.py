"""
Time helpers
All timestamps are stored as naive UTC
"""

from datetime import datetime, timezone
from typing import Optional, Union


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: Union[datetime, str, None]) -> Optional[datetime]:
    """
    Normalize a datetime coming from a request or a database row

    SQLite hands back strings, PostgreSQL aware datetimes, clients may send either.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def epoch_millis(value: Optional[datetime] = None) -> int:
    value = value or utcnow()
    return int(value.replace(tzinfo=timezone.utc).timestamp() * 1000)


def from_epoch_millis(millis: int) -> datetime:
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).replace(tzinfo=None)


def start_of_month(value: Optional[datetime] = None) -> datetime:
    value = value or utcnow()
    return value.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
