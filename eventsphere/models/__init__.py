"""
Database Models
Import all models here for Alembic migrations
"""

from eventsphere.models.user import User
from eventsphere.models.event import Event, Registration
from eventsphere.models.feedback import Feedback
from eventsphere.models.certificate import CertificateTemplate, Certificate, CertificateVerification
from eventsphere.models.gallery import GalleryMedia, EventMedia
from eventsphere.models.notification import Notification, NotificationRead
from eventsphere.models.activity_log import ActivityLog

__all__ = [
    "User",
    "Event",
    "Registration",
    "Feedback",
    "CertificateTemplate",
    "Certificate",
    "CertificateVerification",
    "GalleryMedia",
    "EventMedia",
    "Notification",
    "NotificationRead",
    "ActivityLog",
]
