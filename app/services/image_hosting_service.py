"""
Image hosting on Supabase Storage
"""

import hashlib
import io
from typing import Any, Dict, List, Tuple

from PIL import Image, UnidentifiedImageError

from app.core.config import settings
from app.core.exceptions import BadRequestError, ExternalServiceError
from app.core.logging import log
from app.core.permissions import ensure_can_manage_brand
from app.core.supabase import public_storage_url
from app.models.profile import Profile

ALLOWED_MIME_TYPES = ["image/jpeg", "image/png", "image/webp"]

# Upload kind -> bucket setting
UPLOAD_KINDS = {
    "brands": "BRAND_ASSETS_BUCKET",
    "collections": "BRAND_ASSETS_BUCKET",
    "products": "PRODUCT_IMAGES_BUCKET",
}


def storage_buckets() -> List[str]:
    return [settings.BRAND_ASSETS_BUCKET, settings.PRODUCT_IMAGES_BUCKET, settings.PROFILES_BUCKET]


def _is_photo_like(img: Image.Image) -> bool:
    """Photos have many colours; logos and graphics few"""
    small = img.copy()
    small.thumbnail((100, 100))
    return len(set(small.getdata())) > 1000


def optimize_image(image_data: bytes) -> Tuple[bytes, str]:
    """
    Normalise an uploaded image for the web.

    Transparency is flattened onto white, images are bounded by
    MAX_IMAGE_DIMENSION, photos become JPEG and graphics PNG.
    """
    try:
        img = Image.open(io.BytesIO(image_data))
        img.load()
    except Image.DecompressionBombError:
        raise BadRequestError("Image dimensions are too large")
    except (UnidentifiedImageError, OSError):
        raise BadRequestError("Invalid image file")

    if img.mode in ("RGBA", "LA"):
        background = Image.new("RGB", img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[-1])
        img = background
    elif img.mode not in ("RGB", "L"):
        img = img.convert("RGB")

    max_size = (settings.MAX_IMAGE_DIMENSION, settings.MAX_IMAGE_DIMENSION)
    if img.size[0] > max_size[0] or img.size[1] > max_size[1]:
        img.thumbnail(max_size, Image.Resampling.LANCZOS)

    output = io.BytesIO()
    if _is_photo_like(img):
        img.save(output, format="JPEG", quality=85, optimize=True)
        mime_type = "image/jpeg"
    else:
        img.save(output, format="PNG", optimize=True)
        mime_type = "image/png"

    return output.getvalue(), mime_type


class ImageHostingService:
    """Uploads brand imagery and keeps the storage buckets in place"""

    def __init__(self, client: Any):
        self.storage = client.storage

    async def setup_buckets(self) -> Dict[str, str]:
        """Create any missing public bucket; returns bucket -> created/exists/failed"""
        existing = {bucket.id for bucket in await self.storage.list_buckets()}

        results = {}
        for name in storage_buckets():
            if name in existing:
                results[name] = "exists"
                continue
            try:
                await self.storage.create_bucket(
                    name,
                    options={
                        "public": True,
                        "file_size_limit": settings.MAX_UPLOAD_BYTES,
                        "allowed_mime_types": ALLOWED_MIME_TYPES,
                    },
                )
                log.info(f"Created storage bucket: {name}")
                results[name] = "created"
            except Exception as e:
                log.error(f"Failed to create bucket {name}", error=str(e))
                results[name] = "failed"
        return results

    async def upload_brand_image(
        self, profile: Profile, *, brand_id: str, kind: str, data: bytes, content_type: str
    ) -> Dict[str, str]:
        """Store an image for a brand and return its public URL"""
        ensure_can_manage_brand(profile, brand_id)

        if kind not in UPLOAD_KINDS:
            raise BadRequestError(f"Upload kind must be one of: {', '.join(UPLOAD_KINDS)}")
        if content_type not in ALLOWED_MIME_TYPES:
            raise BadRequestError("Only JPEG, PNG and WebP images are allowed")
        if not data:
            raise BadRequestError("Empty file")
        if len(data) > settings.MAX_UPLOAD_BYTES:
            raise BadRequestError("File too large")

        optimized, mime_type = optimize_image(data)

        # Content hash keeps re-uploads of the same image on one object
        image_hash = hashlib.sha256(optimized).hexdigest()[:12]
        extension = "jpg" if mime_type == "image/jpeg" else "png"
        bucket = getattr(settings, UPLOAD_KINDS[kind])
        path = f"{kind}/{brand_id}/{image_hash}.{extension}"

        try:
            await self.storage.from_(bucket).upload(
                path,
                optimized,
                file_options={"content-type": mime_type, "cache-control": "31536000", "upsert": "true"},
            )
        except Exception as e:
            log.error("Image upload failed", bucket=bucket, path=path, error=str(e))
            raise ExternalServiceError("Image upload failed")

        url = public_storage_url(bucket, path)
        log.info("Uploaded image", brand_id=brand_id, bucket=bucket, path=path, user_id=profile.id)
        return {"url": url, "path": path, "bucket": bucket}
