"""
Script to create an Admin
Run this to create the first admin account; admins cannot self-register
"""

import sys
import asyncio
import uuid
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from eventsphere.database import database, connect_db, disconnect_db
from eventsphere.auth import hash_password, generate_random_password, validate_password_strength
from eventsphere.timeutils import utcnow


async def create_admin(email: str, name: str, password: str = None, department: str = None):
    """
    Create an admin user

    Args:
        email: Admin email
        name: Admin full name
        password: Password (if None, will generate random)
        department: Optional department
    """

    await connect_db()

    try:
        email = email.strip().lower()
        existing = await database.fetch_one(
            "SELECT id FROM users WHERE email = :email",
            {"email": email}
        )

        if existing:
            print(f"An account with email {email} already exists")
            return

        generated = password is None
        if generated:
            password = generate_random_password(12)

        now = utcnow()
        await database.execute(
            """
            INSERT INTO users
            (id, name, email, password_hash, role, department, is_approved,
             two_factor_enabled, is_active, created_at, updated_at)
            VALUES (:id, :name, :email, :password_hash, :role, :department, :is_approved,
                    :two_factor_enabled, :is_active, :created_at, :updated_at)
            """,
            {
                "id": str(uuid.uuid4()),
                "name": name,
                "email": email,
                "password_hash": hash_password(password),
                "role": "admin",
                "department": department,
                "is_approved": True,
                "two_factor_enabled": False,
                "is_active": True,
                "created_at": now,
                "updated_at": now
            }
        )

        print("Admin created successfully")
        print(f"   Email: {email}")
        print(f"   Name: {name}")

        if generated:
            print(f"   Password: {password}")
            print("   Save this password now, it is not stored anywhere in plain text")
        else:
            print("   Password: (custom password set)")

    finally:
        await disconnect_db()


async def main():
    """Main function"""
    print("\n" + "=" * 60)
    print("CREATE EVENTSPHERE ADMIN")
    print("=" * 60 + "\n")

    email = input("Enter email: ").strip()
    name = input("Enter full name: ").strip()
    department = input("Enter department (optional): ").strip() or None

    use_custom = input("Set custom password? (y/n): ").strip().lower()

    if use_custom == 'y':
        password = input("Enter password: ").strip()
        confirm = input("Confirm password: ").strip()

        if password != confirm:
            print("Passwords do not match")
            return

        problems = validate_password_strength(password)
        if problems:
            for problem in problems:
                print(f" - {problem}")
            return
    else:
        password = None

    print("\n")
    await create_admin(email, name, password, department)
    print("\n")


if __name__ == "__main__":
    asyncio.run(main())
