"""
Certificate Models
Templates, issued certificates and public verification records
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text, BigInteger, UniqueConstraint, func
from eventsphere.database import Base
from eventsphere.models.types import GUID, JSONType, new_id


class CertificateTemplate(Base):
    __tablename__ = "certificate_templates"

    id = Column(GUID, primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    template_url = Column(Text, nullable=False)

    # NULL event_id means the template can be used for any event
    event_id = Column(GUID, ForeignKey("events.id", ondelete="SET NULL"), nullable=True)
    organizer_id = Column(GUID, ForeignKey("users.id"), nullable=False, index=True)
    organizer_name = Column(String(100), nullable=True)

    file_size_bytes = Column(BigInteger, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Certificate(Base):
    __tablename__ = "certificates"
    __table_args__ = (
        UniqueConstraint("event_id", "participant_id", name="uq_certificates_event_participant"),
    )

    id = Column(GUID, primary_key=True, default=new_id)
    certificate_id = Column(String(150), unique=True, nullable=False, index=True)
    verification_code = Column(String(8), unique=True, nullable=False, index=True)

    # Event snapshot
    event_id = Column(GUID, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    event_title = Column(String(200), nullable=False)
    event_date = Column(DateTime, nullable=True)
    event_venue = Column(String(200), nullable=True)
    event_category = Column(String(50), nullable=True)

    # Participant snapshot
    participant_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    participant_name = Column(String(100), nullable=False)
    participant_email = Column(String(255), nullable=False)
    participant_department = Column(String(100), nullable=True)
    participant_role = Column(String(50), nullable=False, default="participant")

    template_id = Column(GUID, ForeignKey("certificate_templates.id"), nullable=False)
    template_url = Column(Text, nullable=False)
    custom_fields = Column(JSONType, nullable=True)

    # Issue and lifecycle: issued, downloaded, revoked
    status = Column(String(20), nullable=False, default="issued")
    issued_at = Column(DateTime, server_default=func.now())
    issued_by = Column(GUID, ForeignKey("users.id"), nullable=False)
    issued_by_name = Column(String(100), nullable=True)
    download_count = Column(Integer, nullable=False, default=0)
    last_downloaded_at = Column(DateTime, nullable=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class CertificateVerification(Base):
    __tablename__ = "certificate_verifications"

    id = Column(GUID, primary_key=True, default=new_id)
    certificate_id = Column(String(150), nullable=False, index=True)
    participant_id = Column(GUID, nullable=False)
    event_id = Column(GUID, nullable=False)
    verified_at = Column(DateTime, server_default=func.now())
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
