"""
User Service
Registration, login and admin user management
"""

import logging
from typing import Optional

from fastapi import HTTPException, status

from eventsphere.auth import hash_password, verify_password, validate_password_strength
from eventsphere.database import database, like_pattern
from eventsphere.models.types import new_id
from eventsphere.schemas.auth import RegisterRequest, UpdateUserRequest
from eventsphere.timeutils import utcnow

logger = logging.getLogger(__name__)

USER_COLUMNS = """
    id, name, email, role, department, enrollment_number, institutional_id,
    is_approved, is_active, two_factor_enabled, last_login, created_at, updated_at
"""


class UserService:
    """Service for user accounts"""

    @staticmethod
    def check_password_strength(password: str) -> None:
        errors = validate_password_strength(password)
        if errors:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "Password validation failed", "details": errors}
            )

    @staticmethod
    async def get_user(user_id: str) -> Optional[dict]:
        user = await database.fetch_one(
            f"SELECT {USER_COLUMNS} FROM users WHERE id = :id",
            {"id": str(user_id)}
        )
        return dict(user) if user else None

    @staticmethod
    async def register(data: RegisterRequest) -> dict:
        """
        Create a participant or organizer account

        Organizers start unapproved and cannot log in until an admin approves them.
        """
        if data.role == "participant" and not (data.department and data.enrollment_number):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Department and enrollment number are required for participants"
            )
        if data.role == "organizer" and not (data.department and data.institutional_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Institutional ID and department are required for organizers"
            )

        UserService.check_password_strength(data.password)

        email = data.email.lower()

        existing = await database.fetch_one(
            "SELECT id FROM users WHERE email = :email",
            {"email": email}
        )
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User with this email already exists"
            )

        if data.role == "participant":
            duplicate = await database.fetch_one(
                "SELECT id FROM users WHERE enrollment_number = :value",
                {"value": data.enrollment_number}
            )
            if duplicate:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Enrollment number already registered"
                )
        else:
            duplicate = await database.fetch_one(
                "SELECT id FROM users WHERE institutional_id = :value",
                {"value": data.institutional_id}
            )
            if duplicate:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Institutional ID already registered"
                )

        user_id = new_id()
        now = utcnow()
        await database.execute(
            """
            INSERT INTO users
            (id, name, email, password_hash, role, department, enrollment_number, institutional_id,
             is_approved, two_factor_enabled, is_active, created_at, updated_at)
            VALUES (:id, :name, :email, :password_hash, :role, :department, :enrollment_number, :institutional_id,
                    :is_approved, :two_factor_enabled, :is_active, :created_at, :updated_at)
            """,
            {
                "id": user_id,
                "name": data.name.strip(),
                "email": email,
                "password_hash": hash_password(data.password),
                "role": data.role,
                "department": data.department,
                "enrollment_number": data.enrollment_number if data.role == "participant" else None,
                "institutional_id": data.institutional_id if data.role == "organizer" else None,
                "is_approved": data.role != "organizer",
                "two_factor_enabled": False,
                "is_active": True,
                "created_at": now,
                "updated_at": now
            }
        )

        logger.info("Registered %s account", data.role, extra={"user_id": user_id})
        return await UserService.get_user(user_id)

    @staticmethod
    async def authenticate(email: str, password: str) -> dict:
        """Check credentials and account state, then stamp last_login"""
        user = await database.fetch_one(
            f"SELECT {USER_COLUMNS}, password_hash FROM users WHERE email = :email",
            {"email": email.lower()}
        )

        if not user or not verify_password(password, user["password_hash"]):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials"
            )

        if not user["is_active"]:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Account is deactivated"
            )

        if user["role"] == "organizer" and not user["is_approved"]:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Account pending approval from administrator"
            )

        now = utcnow()
        await database.execute(
            "UPDATE users SET last_login = :now WHERE id = :id",
            {"now": now, "id": str(user["id"])}
        )

        result = dict(user)
        result.pop("password_hash", None)
        result["last_login"] = now
        return result

    @staticmethod
    async def change_password(user_id: str, current_password: str, new_password: str, confirm_password: str) -> None:
        user = await database.fetch_one(
            "SELECT password_hash FROM users WHERE id = :id AND is_active = :active",
            {"id": str(user_id), "active": True}
        )
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        if not verify_password(current_password, user["password_hash"]):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Current password is incorrect"
            )

        if new_password != confirm_password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="New passwords do not match"
            )

        if new_password == current_password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="New password must be different from current password"
            )

        UserService.check_password_strength(new_password)

        await database.execute(
            "UPDATE users SET password_hash = :password_hash, updated_at = :now WHERE id = :id",
            {"password_hash": hash_password(new_password), "now": utcnow(), "id": str(user_id)}
        )

    @staticmethod
    async def list_users(
        role: Optional[str] = None,
        status_filter: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> tuple[list, int]:
        """Admin user listing; status is one of pending, active, inactive"""
        conditions = ["1 = 1"]
        params = {}

        if role:
            conditions.append("role = :role")
            params["role"] = role

        if status_filter == "pending":
            conditions.append("role = 'organizer' AND is_approved = :false AND is_active = :true")
            params.update({"false": False, "true": True})
        elif status_filter == "active":
            conditions.append("is_active = :true AND is_approved = :true")
            params["true"] = True
        elif status_filter == "inactive":
            conditions.append("is_active = :false")
            params["false"] = False

        if search:
            conditions.append(
                "(LOWER(name) LIKE :search ESCAPE '!' OR LOWER(email) LIKE :search ESCAPE '!'"
                " OR LOWER(COALESCE(department, '')) LIKE :search ESCAPE '!')"
            )
            params["search"] = like_pattern(search)

        where_clause = " AND ".join(conditions)

        total = await database.fetch_val(f"SELECT COUNT(*) FROM users WHERE {where_clause}", params)

        users = await database.fetch_all(
            f"""
            SELECT {USER_COLUMNS} FROM users
            WHERE {where_clause}
            ORDER BY created_at DESC
            LIMIT :limit OFFSET :offset
            """,
            {**params, "limit": limit, "offset": (page - 1) * limit}
        )

        return [dict(u) for u in users], total or 0

    @staticmethod
    async def update_user(user_id: str, data: UpdateUserRequest, acting_admin_id: str) -> tuple[dict, dict]:
        """
        Apply admin edits

        Returns:
            Tuple of (updated user, previous user)
        """
        user = await UserService.get_user(user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        if str(user_id) == str(acting_admin_id) and changes.get("is_active") is False:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot deactivate your own account"
            )

        if not changes:
            return user, user

        set_clause = ", ".join(f"{field} = :{field}" for field in changes)
        await database.execute(
            f"UPDATE users SET {set_clause}, updated_at = :updated_at WHERE id = :id",
            {**changes, "updated_at": utcnow(), "id": str(user_id)}
        )

        return await UserService.get_user(user_id), user

    @staticmethod
    async def deactivate_user(user_id: str, acting_admin_id: str) -> dict:
        if str(user_id) == str(acting_admin_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete your own account"
            )

        user = await UserService.get_user(user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        await database.execute(
            "UPDATE users SET is_active = :false, updated_at = :now WHERE id = :id",
            {"false": False, "now": utcnow(), "id": str(user_id)}
        )
        return user


user_service = UserService()
