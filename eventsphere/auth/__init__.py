"""
Authentication Module
Password hashing and JWT token management
"""

from eventsphere.auth.password import (
    hash_password,
    verify_password,
    validate_password_strength,
    generate_random_password,
    generate_verification_code
)
from eventsphere.auth.dependencies import (
    create_access_token,
    create_user_token,
    decode_access_token,
    set_auth_cookie,
    clear_auth_cookie,
    get_current_user,
    require_roles,
    get_participant,
    get_organizer,
    get_admin
)

__all__ = [
    "hash_password",
    "verify_password",
    "validate_password_strength",
    "generate_random_password",
    "generate_verification_code",
    "create_access_token",
    "create_user_token",
    "decode_access_token",
    "set_auth_cookie",
    "clear_auth_cookie",
    "get_current_user",
    "require_roles",
    "get_participant",
    "get_organizer",
    "get_admin",
]
