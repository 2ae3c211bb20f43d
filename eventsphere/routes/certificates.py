"""
Certificate Routes
Participant certificate list, download and public verification
"""

from io import BytesIO
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from eventsphere.auth import get_current_user, get_participant
from eventsphere.schemas.certificate import CertificateListResponse, CertificateResponse, VerifyCertificateResponse
from eventsphere.services.certificate_service import certificate_service

router = APIRouter()


@router.get("", response_model=CertificateListResponse)
async def list_my_certificates(
    event_id: Optional[UUID] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(20, ge=1, le=100),
    current_user: dict = Depends(get_participant)
):
    """Certificates issued to the current participant, newest first"""
    certificates = await certificate_service.list_for_participant(
        current_user["user_id"],
        event_id=str(event_id) if event_id else None,
        status_filter=status_filter,
        limit=limit
    )
    return {"certificates": certificates, "total": len(certificates)}


@router.get("/verify", response_model=VerifyCertificateResponse)
async def verify_certificate(
    request: Request,
    certificate_id: Optional[str] = Query(None, description="Full certificate ID"),
    code: Optional[str] = Query(None, description="8-character verification code")
):
    """
    Public certificate verification

    Revoked certificates answer 410 with the certificate summary.
    """
    return await certificate_service.verify(
        certificate_id,
        code,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent")
    )


@router.get("/{cert_id}/download")
async def download_certificate(
    cert_id: UUID,
    format: str = Query("json", pattern="^(json|pdf)$"),
    current_user: dict = Depends(get_current_user)
):
    """
    Download a certificate (owner, event organizer or admin)

    Counts the download; `format=pdf` returns the rendered PDF.
    """
    certificate = await certificate_service.record_download(str(cert_id), current_user)

    if format == "pdf":
        pdf_bytes = await certificate_service.render_pdf(certificate)
        filename = f"{certificate['certificate_id']}.pdf"
        return StreamingResponse(
            BytesIO(pdf_bytes),
            media_type="application/pdf",
            headers={"Content-Disposition": f"attachment; filename={filename}"}
        )

    return {
        "message": "Certificate ready for download",
        "certificate": CertificateResponse.model_validate(certificate).model_dump(mode="json"),
    }
