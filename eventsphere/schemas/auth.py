"""
Authentication Request/Response Models
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal
from datetime import datetime
from uuid import UUID

from eventsphere.schemas.event import Pagination


class RegisterRequest(BaseModel):
    """Self-registration; admins are created with scripts/create_admin.py"""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: Literal["participant", "organizer"] = "participant"
    department: Optional[str] = Field(default=None, max_length=100)
    enrollment_number: Optional[str] = Field(default=None, max_length=50)
    institutional_id: Optional[str] = Field(default=None, max_length=50)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str
    confirm_password: str


class UserResponse(BaseModel):
    """User details without credentials"""
    model_config = {"from_attributes": True}

    id: UUID
    name: str
    email: str
    role: str
    department: Optional[str] = None
    enrollment_number: Optional[str] = None
    institutional_id: Optional[str] = None
    is_approved: bool
    is_active: bool
    two_factor_enabled: bool = False
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
    token: Optional[str] = None
    requires_approval: bool = False


class UpdateUserRequest(BaseModel):
    """Fields an admin may change on a user"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    department: Optional[str] = Field(default=None, max_length=100)
    role: Optional[Literal["participant", "organizer", "admin"]] = None
    is_approved: Optional[bool] = None
    is_active: Optional[bool] = None


class UserListResponse(BaseModel):
    users: list[UserResponse]
    pagination: Pagination
