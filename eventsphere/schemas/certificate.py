"""
Certificate Request/Response Models
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Any
from datetime import datetime
from uuid import UUID
import json


class TemplateResponse(BaseModel):
    """Certificate template details"""
    model_config = {"from_attributes": True}

    id: UUID
    name: str
    description: Optional[str] = None
    template_url: str
    event_id: Optional[UUID] = None
    organizer_id: UUID
    organizer_name: Optional[str] = None
    file_size_bytes: Optional[int] = None
    is_active: bool = True
    created_at: Optional[datetime] = None


class CertificateCriteria(BaseModel):
    attendance_required: bool = False
    payment_required: bool = False


class IssueCertificatesRequest(BaseModel):
    """Batch issue certificates for an event"""
    event_id: UUID
    template_id: UUID
    participant_ids: Optional[List[UUID]] = Field(default=None, description="Restrict issuing to these users")
    criteria: CertificateCriteria = Field(default_factory=CertificateCriteria)
    custom_fields: Optional[dict] = None


class CertificateResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    certificate_id: str
    verification_code: str
    event_id: UUID
    event_title: str
    event_date: Optional[datetime] = None
    event_venue: Optional[str] = None
    event_category: Optional[str] = None
    participant_id: UUID
    participant_name: str
    participant_email: str
    participant_department: Optional[str] = None
    participant_role: str = "participant"
    template_id: UUID
    template_url: str
    custom_fields: Optional[dict] = None
    status: str
    issued_at: Optional[datetime] = None
    issued_by: UUID
    issued_by_name: Optional[str] = None
    download_count: int = 0
    last_downloaded_at: Optional[datetime] = None

    @field_validator("custom_fields", mode="before")
    @classmethod
    def parse_custom_fields(cls, v: Any):
        if isinstance(v, str):
            try:
                return json.loads(v)
            except (json.JSONDecodeError, TypeError):
                return {"raw": v}
        return v


class IssueCertificatesResponse(BaseModel):
    message: str
    issued: int
    skipped: int
    certificates: List[CertificateResponse]


class CertificateListResponse(BaseModel):
    certificates: List[CertificateResponse]
    total: int


class VerifiedCertificate(BaseModel):
    certificate_id: str
    participant_name: str
    event_title: str
    event_date: Optional[datetime] = None
    event_venue: Optional[str] = None
    issued_at: Optional[datetime] = None
    issued_by_name: Optional[str] = None
    verification_code: str
    status: str


class VerifyCertificateResponse(BaseModel):
    valid: bool
    certificate: VerifiedCertificate
