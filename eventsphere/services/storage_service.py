"""
Storage Service
Supabase Storage when configured, local static directory otherwise
"""

import logging
from pathlib import Path
from typing import Optional

import httpx
from fastapi import HTTPException, status
from eventsphere.config import settings

logger = logging.getLogger(__name__)


class StorageService:
    """File storage helper for templates, gallery images and event media"""

    @staticmethod
    def is_remote() -> bool:
        return bool(settings.SUPABASE_URL and settings.SUPABASE_KEY)

    @staticmethod
    def local_root() -> Path:
        return Path(settings.STATIC_DIR) / settings.UPLOAD_SUBDIR

    @staticmethod
    def local_path_for_url(file_url: str) -> Optional[Path]:
        """Map a /static/... URL back to a file on disk"""
        if not file_url.startswith("/static/"):
            return None
        return Path(settings.STATIC_DIR) / file_url[len("/static/"):]

    @staticmethod
    async def upload_bytes(path: str, content: bytes, content_type: str) -> str:
        """Store content under path and return its public URL"""
        if not StorageService.is_remote():
            target = StorageService.local_root() / path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
            return f"/static/{settings.UPLOAD_SUBDIR}/{path}"

        base = settings.SUPABASE_URL.rstrip("/")
        bucket = settings.STORAGE_BUCKET
        url = f"{base}/storage/v1/object/{bucket}/{path}"

        headers = {
            "Authorization": f"Bearer {settings.SUPABASE_KEY}",
            "apikey": settings.SUPABASE_KEY,
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "true"
        }

        async with httpx.AsyncClient(timeout=30) as client:
            resp = await client.post(url, headers=headers, content=content)

        if resp.status_code not in (200, 201):
            logger.error("Storage upload failed for %s: %s", path, resp.text)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Storage upload failed"
            )

        return f"{base}/storage/v1/object/public/{bucket}/{path}"

    @staticmethod
    async def fetch_bytes(file_url: str) -> bytes:
        """Read a stored file back, from disk or over HTTP"""
        local_path = StorageService.local_path_for_url(file_url)
        if local_path is not None:
            if not local_path.exists():
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stored file not found")
            return local_path.read_bytes()

        async with httpx.AsyncClient(timeout=30) as client:
            resp = await client.get(file_url)
        if resp.status_code != 200:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stored file not found")
        return resp.content

    @staticmethod
    async def delete_path(path: str) -> None:
        base = settings.SUPABASE_URL.rstrip("/")
        bucket = settings.STORAGE_BUCKET
        url = f"{base}/storage/v1/object/{bucket}/{path}"

        headers = {
            "Authorization": f"Bearer {settings.SUPABASE_KEY}",
            "apikey": settings.SUPABASE_KEY
        }

        async with httpx.AsyncClient(timeout=30) as client:
            resp = await client.delete(url, headers=headers)

        if resp.status_code not in (200, 204, 404):
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Storage delete failed"
            )

    @staticmethod
    async def delete_by_url(file_url: Optional[str]) -> None:
        """Delete a stored file; unknown URL formats are left alone"""
        if not file_url:
            return

        local_path = StorageService.local_path_for_url(file_url)
        if local_path is not None:
            local_path.unlink(missing_ok=True)
            return

        if not StorageService.is_remote():
            return

        base = settings.SUPABASE_URL.rstrip("/")
        prefix = f"{base}/storage/v1/object/public/{settings.STORAGE_BUCKET}/"
        if file_url.startswith(prefix):
            await StorageService.delete_path(file_url[len(prefix):])

    @staticmethod
    async def safe_delete(file_url: Optional[str]) -> None:
        try:
            await StorageService.delete_by_url(file_url)
        except Exception:
            logger.warning("Failed to delete stored file %s", file_url, exc_info=True)
