"""
Image Optimization Service
Resize uploads, strip metadata and produce gallery thumbnails
"""

import logging
from io import BytesIO
from typing import Tuple

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class ImageOptimizer:
    """Pillow-based resize + re-encode for uploaded images"""

    MAX_DIMENSION = 2048
    THUMBNAIL_SIZE = (400, 400)

    @staticmethod
    def is_valid_image(image_bytes: bytes) -> bool:
        try:
            with Image.open(BytesIO(image_bytes)) as img:
                img.verify()
            return True
        except (UnidentifiedImageError, OSError, SyntaxError):
            return False

    @staticmethod
    def optimize(image_bytes: bytes, content_type: str = "image/png") -> Tuple[bytes, str]:
        """
        Downscale images larger than MAX_DIMENSION and drop EXIF data.

        Images with transparency stay PNG; opaque ones become JPEG.
        Returns the original bytes if Pillow cannot decode them.
        """
        try:
            img = Image.open(BytesIO(image_bytes))
            has_transparency = img.mode in ('RGBA', 'LA') or (img.mode == 'P' and 'transparency' in img.info)

            if max(img.size) > ImageOptimizer.MAX_DIMENSION:
                img.thumbnail((ImageOptimizer.MAX_DIMENSION, ImageOptimizer.MAX_DIMENSION), Image.Resampling.LANCZOS)

            output = BytesIO()
            if has_transparency:
                img.save(output, format='PNG', optimize=True)
                return output.getvalue(), "image/png"

            if img.mode != 'RGB':
                img = img.convert('RGB')
            img.save(output, format='JPEG', quality=90, optimize=True)
            return output.getvalue(), "image/jpeg"
        except (UnidentifiedImageError, OSError) as e:
            logger.warning("Image optimization skipped: %s", e)
            return image_bytes, content_type

    @staticmethod
    def make_thumbnail(image_bytes: bytes) -> bytes:
        img = Image.open(BytesIO(image_bytes))
        if img.mode != 'RGB':
            img = img.convert('RGB')
        img.thumbnail(ImageOptimizer.THUMBNAIL_SIZE, Image.Resampling.LANCZOS)
        output = BytesIO()
        img.save(output, format='JPEG', quality=80)
        return output.getvalue()

    @staticmethod
    def extension_for(content_type: str) -> str:
        return {
            "image/jpeg": "jpg",
            "image/jpg": "jpg",
            "image/png": "png",
            "image/gif": "gif",
            "image/webp": "webp",
            "application/pdf": "pdf",
        }.get(content_type, "bin")
