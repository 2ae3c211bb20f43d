"""
Portable column types
Native UUID/JSONB on PostgreSQL, plain text elsewhere
"""

import uuid

from sqlalchemy import JSON, String
from sqlalchemy.dialects.postgresql import JSONB, UUID

GUID = String(36).with_variant(UUID(as_uuid=False), "postgresql")
JSONType = JSON().with_variant(JSONB(), "postgresql")


def new_id() -> str:
    return str(uuid.uuid4())
