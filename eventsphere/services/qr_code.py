"""
QR Code Helpers
Check-in payloads have the form event:<event_id>:checkin:<epoch_ms>
"""

import base64
import io
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

import qrcode

from eventsphere.config import settings
from eventsphere.timeutils import epoch_millis, from_epoch_millis, utcnow


@dataclass(frozen=True)
class CheckinPayload:
    event_id: str
    timestamp: int

    @property
    def generated_at(self) -> datetime:
        return from_epoch_millis(self.timestamp)


def build_checkin_payload(event_id: str, generated_at: Optional[datetime] = None) -> str:
    return f"event:{event_id}:checkin:{epoch_millis(generated_at)}"


def parse_checkin_payload(qr_data: str) -> Optional[CheckinPayload]:
    """Return the parsed payload, or None when the string is not a check-in code"""
    parts = (qr_data or "").strip().split(":")
    if len(parts) != 4 or parts[0] != "event" or parts[2] != "checkin":
        return None

    try:
        event_id = str(UUID(parts[1]))
        timestamp = int(parts[3])
    except ValueError:
        return None

    if timestamp <= 0:
        return None

    return CheckinPayload(event_id=event_id, timestamp=timestamp)


def is_payload_expired(payload: CheckinPayload, max_age_hours: Optional[int] = None, now: Optional[datetime] = None) -> bool:
    max_age = timedelta(hours=max_age_hours or settings.QR_CODE_MAX_AGE_HOURS)
    return (now or utcnow()) - payload.generated_at > max_age


def render_qr_png(data: str) -> str:
    """Render data as a QR code PNG and return it base64-encoded"""
    qr = qrcode.QRCode(version=1, box_size=10, border=4)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffered = io.BytesIO()
    img.save(buffered, format="PNG")
    return base64.b64encode(buffered.getvalue()).decode()
