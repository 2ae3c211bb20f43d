"""
EventSphere - Test Configuration and Fixtures
"""
import io
import itertools
import os
import tempfile
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from PIL import Image

# Set testing environment before the app reads its settings
TEST_DIR = tempfile.mkdtemp(prefix="eventsphere-tests-")
os.environ['APP_ENV'] = 'testing'
os.environ['DATABASE_URL'] = f"sqlite:///{os.path.join(TEST_DIR, 'test.db')}"
os.environ['STATIC_DIR'] = os.path.join(TEST_DIR, 'static')
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['SMTP_USER'] = ''
os.environ['SMTP_PASSWORD'] = ''
os.environ['SUPABASE_URL'] = ''
os.environ['SUPABASE_KEY'] = ''
os.environ['LOG_LEVEL'] = 'WARNING'

from fastapi.testclient import TestClient
from sqlalchemy import text

from eventsphere.auth import hash_password
from eventsphere.database import Base, engine
from eventsphere.main import app
import eventsphere.models  # noqa: F401

Base.metadata.create_all(bind=engine)

PASSWORD = 'Passw0rd123'
_counter = itertools.count(1)


def in_hours(hours: float) -> str:
    """ISO timestamp relative to now, as a client would send it"""
    return (datetime.now(timezone.utc) + timedelta(hours=hours)).isoformat()


def png_bytes(size=(64, 48), color=(200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new('RGB', size, color).save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def clean_database():
    """Empty every table before each test"""
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def _login(client, email: str, password: str = PASSWORD) -> dict:
    response = client.post('/api/auth/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.text
    client.cookies.clear()
    body = response.json()
    return {
        'user': body['user'],
        'token': body['token'],
        'headers': {'Authorization': f"Bearer {body['token']}"},
    }


@pytest.fixture
def make_participant(client):
    """Register and sign in a participant"""
    def _make(name: str = None, department: str = 'Computer Science') -> dict:
        n = next(_counter)
        email = f'student{n}@college.edu'
        response = client.post('/api/auth/register', json={
            'name': name or f'Student {n}',
            'email': email,
            'password': PASSWORD,
            'role': 'participant',
            'department': department,
            'enrollment_number': f'ENR{n:05d}',
        })
        assert response.status_code == 201, response.text
        client.cookies.clear()
        body = response.json()
        return {
            'user': body['user'],
            'token': body['token'],
            'headers': {'Authorization': f"Bearer {body['token']}"},
            'email': email,
        }
    return _make


@pytest.fixture
def make_organizer(client):
    """Register an organizer, approve the account directly and sign in"""
    def _make(name: str = None, department: str = 'Computer Science') -> dict:
        n = next(_counter)
        email = f'organizer{n}@college.edu'
        response = client.post('/api/auth/register', json={
            'name': name or f'Organizer {n}',
            'email': email,
            'password': PASSWORD,
            'role': 'organizer',
            'department': department,
            'institutional_id': f'FAC{n:05d}',
        })
        assert response.status_code == 201, response.text
        client.cookies.clear()

        with engine.begin() as conn:
            conn.execute(
                text("UPDATE users SET is_approved = :approved WHERE email = :email"),
                {'approved': True, 'email': email}
            )

        session = _login(client, email)
        session['email'] = email
        return session
    return _make


@pytest.fixture
def admin(client):
    """Seed an admin row the way scripts/create_admin.py does and sign in"""
    email = f'admin{next(_counter)}@college.edu'
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    with engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO users (id, name, email, password_hash, role, department, is_approved, "
                "two_factor_enabled, is_active, created_at, updated_at) "
                "VALUES (:id, :name, :email, :password_hash, 'admin', :department, :approved, "
                ":two_factor, :active, :now, :now)"
            ),
            {
                'id': str(uuid.uuid4()),
                'name': 'Campus Admin',
                'email': email,
                'password_hash': hash_password(PASSWORD),
                'department': 'Administration',
                'approved': True,
                'two_factor': False,
                'active': True,
                'now': now,
            }
        )
    session = _login(client, email)
    session['email'] = email
    return session


@pytest.fixture
def create_event(client):
    """POST an event; admins get it approved immediately"""
    def _create(headers: dict, hours_from_now: float = 240, **overrides) -> dict:
        payload = {
            'title': 'Robotics Workshop',
            'description': 'Build a line follower in an afternoon',
            'category': 'workshop',
            'department': 'Computer Science',
            'venue': 'Lab 2',
            'date': in_hours(hours_from_now),
            'time': '10:00',
            'tags': ['robotics', 'hardware'],
        }
        payload.update(overrides)
        response = client.post('/api/events', json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _create
