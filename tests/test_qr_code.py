"""
Check-in QR payload parsing
"""
import base64
import uuid
from datetime import datetime, timedelta

from eventsphere.services.qr_code import (
    build_checkin_payload,
    parse_checkin_payload,
    is_payload_expired,
    render_qr_png,
)


def test_payload_format():
    event_id = str(uuid.uuid4())
    generated_at = datetime(2026, 3, 1, 12, 0, 0)
    payload = build_checkin_payload(event_id, generated_at)

    assert payload.startswith(f'event:{event_id}:checkin:')
    parsed = parse_checkin_payload(payload)
    assert parsed.event_id == event_id
    assert parsed.generated_at == generated_at


def test_rejects_malformed_payloads():
    event_id = str(uuid.uuid4())
    assert parse_checkin_payload('') is None
    assert parse_checkin_payload(None) is None
    assert parse_checkin_payload(f'event:{event_id}:checkin') is None
    assert parse_checkin_payload(f'evt:{event_id}:checkin:1700000000000') is None
    assert parse_checkin_payload(f'event:{event_id}:checkout:1700000000000') is None
    assert parse_checkin_payload('event:not-a-uuid:checkin:1700000000000') is None
    assert parse_checkin_payload(f'event:{event_id}:checkin:soon') is None
    assert parse_checkin_payload(f'event:{event_id}:checkin:0') is None


def test_expiry_after_24_hours():
    now = datetime(2026, 3, 2, 12, 0, 0)
    fresh = parse_checkin_payload(build_checkin_payload(str(uuid.uuid4()), now - timedelta(hours=23)))
    stale = parse_checkin_payload(build_checkin_payload(str(uuid.uuid4()), now - timedelta(hours=25)))

    assert not is_payload_expired(fresh, now=now)
    assert is_payload_expired(stale, now=now)
    assert not is_payload_expired(stale, max_age_hours=48, now=now)


def test_render_png():
    image = base64.b64decode(render_qr_png('event:x:checkin:1'))
    assert image.startswith(b'\x89PNG')
