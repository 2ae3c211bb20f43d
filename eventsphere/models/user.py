"""
User Model
Participants, organizers and admins share one table
"""

from sqlalchemy import Column, String, Boolean, DateTime, func
from eventsphere.database import Base
from eventsphere.models.types import GUID, new_id


class User(Base):
    __tablename__ = "users"

    id = Column(GUID, primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="participant")  # participant, organizer, admin
    department = Column(String(100), nullable=True)

    # Identity numbers; participants carry an enrollment number, organizers an institutional id
    enrollment_number = Column(String(50), unique=True, nullable=True)
    institutional_id = Column(String(50), unique=True, nullable=True)

    # Status
    is_approved = Column(Boolean, default=True)
    two_factor_enabled = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
