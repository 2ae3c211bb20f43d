"""
Pydantic schemas for request/response validation
"""

from eventsphere.schemas.auth import RegisterRequest, LoginRequest, UserResponse, AuthResponse
from eventsphere.schemas.event import CreateEventRequest, UpdateEventRequest, EventResponse, EventListResponse
from eventsphere.schemas.certificate import IssueCertificatesRequest, CertificateResponse

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "CreateEventRequest",
    "UpdateEventRequest",
    "EventResponse",
    "EventListResponse",
    "IssueCertificatesRequest",
    "CertificateResponse",
]
