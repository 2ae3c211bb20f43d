"""
Certificate Service
Issuing, listing, downloading, rendering and public verification of certificates
"""

import json
import logging
from io import BytesIO
from typing import Optional, Tuple

import img2pdf
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError
from fastapi import HTTPException, status

from eventsphere.auth import generate_verification_code
from eventsphere.database import database
from eventsphere.models.types import new_id
from eventsphere.schemas.certificate import IssueCertificatesRequest
from eventsphere.services.activity_log_service import ActivityLogService
from eventsphere.services.email_service import EmailService
from eventsphere.services.event_service import EventService
from eventsphere.services.notification_service import NotificationService
from eventsphere.services.storage_service import StorageService
from eventsphere.timeutils import as_naive_utc, epoch_millis, utcnow

logger = logging.getLogger(__name__)

CANVAS_SIZE = (1600, 1131)
MAX_CODE_ATTEMPTS = 10


class CertificateService:
    """Service for certificate operations"""

    @staticmethod
    async def _unique_verification_code(taken: set) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_verification_code()
            if code in taken:
                continue
            exists = await database.fetch_val(
                "SELECT COUNT(*) FROM certificates WHERE verification_code = :code",
                {"code": code}
            )
            if not exists:
                taken.add(code)
                return code
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not generate a unique verification code"
        )

    @staticmethod
    async def issue_certificates(data: IssueCertificatesRequest, current_user: dict) -> dict:
        """
        Issue certificates to eligible registrations of an event

        Eligible means attended, or registered/attended when attendance is not required.
        Participants who already hold a certificate for the event are skipped.
        """
        event = await database.fetch_one(
            "SELECT * FROM events WHERE id = :id AND is_active = :active",
            {"id": str(data.event_id), "active": True}
        )
        if not event or (
            current_user["role"] != "admin" and str(event["organizer_id"]) != str(current_user["user_id"])
        ):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found or access denied"
            )
        event = dict(event)

        template = await database.fetch_one(
            "SELECT * FROM certificate_templates WHERE id = :id AND is_active = :active",
            {"id": str(data.template_id), "active": True}
        )
        if not template or (
            current_user["role"] != "admin" and str(template["organizer_id"]) != str(current_user["user_id"])
        ):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Template not found or access denied"
            )
        if template["event_id"] and str(template["event_id"]) != str(event["id"]):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Template belongs to a different event"
            )

        statuses = "('attended')" if data.criteria.attendance_required else "('registered', 'attended')"
        rows = await database.fetch_all(
            f"""
            SELECT r.*, u.role AS user_role
            FROM registrations r
            JOIN users u ON u.id = r.user_id
            WHERE r.event_id = :event_id AND r.status IN {statuses}
            ORDER BY r.registration_date ASC
            """,
            {"event_id": str(event["id"])}
        )
        eligible = [dict(r) for r in rows]

        if data.participant_ids:
            wanted = {str(pid) for pid in data.participant_ids}
            eligible = [r for r in eligible if str(r["user_id"]) in wanted]

        if not eligible:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No eligible participants found"
            )

        existing_rows = await database.fetch_all(
            "SELECT participant_id FROM certificates WHERE event_id = :event_id",
            {"event_id": str(event["id"])}
        )
        already_issued = {str(r["participant_id"]) for r in existing_rows}

        issued_ids = []
        taken_codes: set = set()
        now = utcnow()
        stamp = epoch_millis(now)

        for registration in eligible:
            user_id = str(registration["user_id"])
            if user_id in already_issued:
                continue

            cert_pk = new_id()
            certificate_id = f"CERT-{event['id']}-{user_id}-{stamp}"
            code = await CertificateService._unique_verification_code(taken_codes)

            await database.execute(
                """
                INSERT INTO certificates
                (id, certificate_id, verification_code, event_id, event_title, event_date, event_venue, event_category,
                 participant_id, participant_name, participant_email, participant_department, participant_role,
                 template_id, template_url, custom_fields, status, issued_at, issued_by, issued_by_name,
                 download_count, updated_at)
                VALUES (:id, :certificate_id, :verification_code, :event_id, :event_title, :event_date, :event_venue, :event_category,
                        :participant_id, :participant_name, :participant_email, :participant_department, :participant_role,
                        :template_id, :template_url, :custom_fields, 'issued', :issued_at, :issued_by, :issued_by_name,
                        0, :updated_at)
                """,
                {
                    "id": cert_pk,
                    "certificate_id": certificate_id,
                    "verification_code": code,
                    "event_id": str(event["id"]),
                    "event_title": event["title"],
                    "event_date": as_naive_utc(event["date"]),
                    "event_venue": event["venue"],
                    "event_category": event["category"],
                    "participant_id": user_id,
                    "participant_name": registration["user_name"],
                    "participant_email": registration["user_email"],
                    "participant_department": registration["user_department"],
                    "participant_role": registration["user_role"] or "participant",
                    "template_id": str(template["id"]),
                    "template_url": template["template_url"],
                    "custom_fields": json.dumps(data.custom_fields) if data.custom_fields else None,
                    "issued_at": now,
                    "issued_by": str(current_user["user_id"]),
                    "issued_by_name": current_user.get("name"),
                    "updated_at": now
                }
            )
            issued_ids.append(cert_pk)
            already_issued.add(user_id)

            await NotificationService.safe_notify_user(
                user_id=user_id,
                title="Certificate Ready",
                message=f"Your certificate for {event['title']} is ready to download.",
                notification_type="certificate_ready",
                event_id=str(event["id"]),
                created_by=current_user["user_id"]
            )
            await EmailService.send_certificate_ready_email(
                registration["user_email"], registration["user_name"], event["title"], certificate_id, code
            )

        await ActivityLogService.safe_log(
            actor_id=current_user["user_id"],
            action="issue_certificates",
            resource_type="event",
            resource_id=str(event["id"]),
            details={"issued": len(issued_ids), "template_id": str(template["id"])}
        )

        certificates = []
        if issued_ids:
            placeholders = ", ".join(f":id{i}" for i in range(len(issued_ids)))
            rows = await database.fetch_all(
                f"SELECT * FROM certificates WHERE id IN ({placeholders}) ORDER BY participant_name",
                {f"id{i}": cid for i, cid in enumerate(issued_ids)}
            )
            certificates = [dict(r) for r in rows]

        logger.info("Issued %d certificates", len(issued_ids), extra={"event_id": str(event["id"])})

        return {
            "message": f"Successfully issued {len(issued_ids)} certificates",
            "issued": len(issued_ids),
            "skipped": len(eligible) - len(issued_ids),
            "certificates": certificates,
        }

    @staticmethod
    async def list_for_participant(
        user_id: str,
        event_id: Optional[str] = None,
        status_filter: Optional[str] = None,
        limit: int = 20
    ) -> list:
        conditions = ["participant_id = :user_id"]
        params = {"user_id": str(user_id)}
        if event_id:
            conditions.append("event_id = :event_id")
            params["event_id"] = str(event_id)
        if status_filter:
            conditions.append("status = :status")
            params["status"] = status_filter

        rows = await database.fetch_all(
            f"""
            SELECT * FROM certificates
            WHERE {' AND '.join(conditions)}
            ORDER BY issued_at DESC
            LIMIT :limit
            """,
            {**params, "limit": limit}
        )
        return [dict(r) for r in rows]

    @staticmethod
    async def list_for_organizer(
        current_user: dict,
        event_id: Optional[str] = None,
        status_filter: Optional[str] = None,
        limit: int = 100
    ) -> list:
        """Certificates of the caller's events; admins see every event"""
        conditions = ["1 = 1"]
        params = {}
        if current_user["role"] != "admin":
            conditions.append("e.organizer_id = :organizer_id")
            params["organizer_id"] = str(current_user["user_id"])
        if event_id:
            conditions.append("c.event_id = :event_id")
            params["event_id"] = str(event_id)
        if status_filter:
            conditions.append("c.status = :status")
            params["status"] = status_filter

        rows = await database.fetch_all(
            f"""
            SELECT c.* FROM certificates c
            JOIN events e ON e.id = c.event_id
            WHERE {' AND '.join(conditions)}
            ORDER BY c.issued_at DESC
            LIMIT :limit
            """,
            {**params, "limit": limit}
        )
        return [dict(r) for r in rows]

    @staticmethod
    async def _get_with_event_owner(cert_id: str) -> dict:
        row = await database.fetch_one(
            """
            SELECT c.*, e.organizer_id AS event_organizer_id
            FROM certificates c
            JOIN events e ON e.id = c.event_id
            WHERE c.id = :id
            """,
            {"id": str(cert_id)}
        )
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Certificate not found")
        return dict(row)

    @staticmethod
    async def revoke(cert_id: str, current_user: dict) -> dict:
        certificate = await CertificateService._get_with_event_owner(cert_id)
        if current_user["role"] != "admin" and str(certificate["event_organizer_id"]) != str(current_user["user_id"]):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Certificate not found or access denied"
            )

        now = utcnow()
        await database.execute(
            "UPDATE certificates SET status = 'revoked', updated_at = :now WHERE id = :id",
            {"now": now, "id": str(cert_id)}
        )

        await ActivityLogService.safe_log(
            actor_id=current_user["user_id"],
            action="revoke_certificate",
            resource_type="certificate",
            resource_id=str(cert_id),
            details={"certificate_id": certificate["certificate_id"]}
        )

        certificate.update({"status": "revoked", "updated_at": now})
        return certificate

    @staticmethod
    async def record_download(cert_id: str, current_user: dict) -> dict:
        """Check access, refuse revoked certificates and count the download"""
        certificate = await CertificateService._get_with_event_owner(cert_id)

        is_owner = str(certificate["participant_id"]) == str(current_user["user_id"])
        is_event_organizer = str(certificate["event_organizer_id"]) == str(current_user["user_id"])
        if not (current_user["role"] == "admin" or is_owner or is_event_organizer):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

        if certificate["status"] == "revoked":
            raise HTTPException(status_code=status.HTTP_410_GONE, detail="Certificate has been revoked")

        now = utcnow()
        await database.execute(
            """
            UPDATE certificates
            SET download_count = download_count + 1, last_downloaded_at = :now, status = 'downloaded', updated_at = :now
            WHERE id = :id
            """,
            {"now": now, "id": str(cert_id)}
        )

        certificate.update({
            "download_count": (certificate["download_count"] or 0) + 1,
            "last_downloaded_at": now,
            "status": "downloaded",
        })
        return certificate

    @staticmethod
    def _public_view(certificate: dict) -> dict:
        return {
            "certificate_id": certificate["certificate_id"],
            "participant_name": certificate["participant_name"],
            "event_title": certificate["event_title"],
            "event_date": certificate["event_date"],
            "event_venue": certificate["event_venue"],
            "issued_at": certificate["issued_at"],
            "issued_by_name": certificate["issued_by_name"],
            "verification_code": certificate["verification_code"],
            "status": certificate["status"],
        }

    @staticmethod
    async def verify(
        certificate_id: Optional[str],
        code: Optional[str],
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> dict:
        if not certificate_id and not code:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Certificate ID or verification code is required"
            )

        if certificate_id:
            row = await database.fetch_one(
                "SELECT * FROM certificates WHERE certificate_id = :value",
                {"value": certificate_id.strip()}
            )
        else:
            row = await database.fetch_one(
                "SELECT * FROM certificates WHERE verification_code = :value",
                {"value": code.strip().upper()}
            )

        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Certificate not found")
        certificate = dict(row)

        if certificate["status"] == "revoked":
            raise HTTPException(
                status_code=status.HTTP_410_GONE,
                detail={
                    "error": "Certificate has been revoked",
                    "valid": False,
                    "certificate": CertificateService._public_view(certificate),
                }
            )

        await database.execute(
            """
            INSERT INTO certificate_verifications (id, certificate_id, participant_id, event_id, verified_at, ip_address, user_agent)
            VALUES (:id, :certificate_id, :participant_id, :event_id, :verified_at, :ip_address, :user_agent)
            """,
            {
                "id": new_id(),
                "certificate_id": certificate["certificate_id"],
                "participant_id": str(certificate["participant_id"]),
                "event_id": str(certificate["event_id"]),
                "verified_at": utcnow(),
                "ip_address": ip_address,
                "user_agent": user_agent
            }
        )

        return {"valid": True, "certificate": CertificateService._public_view(certificate)}

    @staticmethod
    def _load_font(font_size: int) -> ImageFont.ImageFont:
        for candidate in ("DejaVuSans-Bold.ttf", "DejaVuSans.ttf", "Arial.ttf", "arial.ttf"):
            try:
                return ImageFont.truetype(candidate, font_size)
            except OSError:
                continue
        return ImageFont.load_default()

    @staticmethod
    def _draw_centered(draw: ImageDraw.ImageDraw, text: str, y: int, width: int, font_size: int, fill: Tuple[int, int, int]) -> None:
        if not text:
            return
        font = CertificateService._load_font(font_size)
        bbox = draw.textbbox((0, 0), text, font=font)
        text_width = bbox[2] - bbox[0]
        draw.text(((width - text_width) // 2, y), text, fill=fill, font=font)

    @staticmethod
    async def _load_template_image(template_url: str) -> Image.Image:
        """Template image, or a plain bordered canvas when the template is not a raster image"""
        try:
            image_bytes = await StorageService.fetch_bytes(template_url)
            image = Image.open(BytesIO(image_bytes))
            image.load()
            return image
        except (HTTPException, UnidentifiedImageError, OSError) as e:
            logger.warning("Rendering certificate on blank canvas, template unusable: %s", e)
            image = Image.new("RGB", CANVAS_SIZE, "white")
            draw = ImageDraw.Draw(image)
            draw.rectangle([30, 30, CANVAS_SIZE[0] - 30, CANVAS_SIZE[1] - 30], outline=(44, 62, 80), width=8)
            return image

    @staticmethod
    async def render_pdf(certificate: dict) -> bytes:
        """Draw the certificate text on its template and convert to a single-page PDF"""
        image = await CertificateService._load_template_image(certificate["template_url"])
        if image.mode != "RGB":
            image = image.convert("RGB")

        width, height = image.size
        draw = ImageDraw.Draw(image)
        dark = (44, 62, 80)
        muted = (102, 102, 102)

        event_date = as_naive_utc(certificate.get("event_date"))
        date_text = event_date.strftime("%B %d, %Y") if event_date else ""

        CertificateService._draw_centered(draw, "Certificate of Participation", int(height * 0.22), width, max(width // 22, 12), dark)
        CertificateService._draw_centered(draw, certificate["participant_name"], int(height * 0.42), width, max(width // 16, 12), dark)
        CertificateService._draw_centered(
            draw, f"for participating in {certificate['event_title']}", int(height * 0.55), width, max(width // 40, 10), muted
        )
        CertificateService._draw_centered(draw, date_text, int(height * 0.62), width, max(width // 45, 10), muted)
        CertificateService._draw_centered(
            draw,
            f"{certificate['certificate_id']}  |  Verification code: {certificate['verification_code']}",
            int(height * 0.88), width, max(width // 80, 8), muted
        )

        img_buffer = BytesIO()
        image.save(img_buffer, format="PNG")
        return img2pdf.convert(img_buffer.getvalue())


certificate_service = CertificateService()
