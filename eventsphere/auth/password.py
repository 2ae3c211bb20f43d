"""
Password Hashing and Verification
Uses bcrypt for secure password storage
"""

from passlib.context import CryptContext
import secrets
import string
from typing import List

# Password context for hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_PASSWORD_LENGTH = 8


def hash_password(password: str) -> str:
    """
    Hash a plain password

    Args:
        password: Plain text password

    Returns:
        Hashed password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password from database

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def validate_password_strength(password: str) -> List[str]:
    """Return the list of unmet password rules (empty when the password is acceptable)"""
    errors = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if not any(c.isupper() for c in password):
        errors.append("Password must contain at least one uppercase letter")
    if not any(c.islower() for c in password):
        errors.append("Password must contain at least one lowercase letter")
    if not any(c.isdigit() for c in password):
        errors.append("Password must contain at least one number")
    return errors


def generate_random_password(length: int = 12) -> str:
    """
    Generate a secure random password that satisfies the strength rules

    Args:
        length: Length of password (default 12)

    Returns:
        Random password string
    """
    characters = string.ascii_letters + string.digits

    while True:
        password = ''.join(secrets.choice(characters) for _ in range(length))
        if not validate_password_strength(password):
            return password


def generate_verification_code(length: int = 8) -> str:
    """Random code from A-Z0-9 used to verify certificates publicly"""
    alphabet = string.ascii_uppercase + string.digits
    return ''.join(secrets.choice(alphabet) for _ in range(length))
