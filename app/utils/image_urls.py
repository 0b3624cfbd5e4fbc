"""
Rewriting of legacy upload URLs to Supabase Storage public URLs.

Images uploaded through the old site builder live under a ``/lovable-uploads/``
path that no longer resolves; the same files were copied into storage keeping
their file names.
"""
from typing import Optional

from app.core.config import settings
from app.core.supabase import public_storage_url


def legacy_filename(url: Optional[str], marker: Optional[str] = None) -> Optional[str]:
    """File name of a legacy upload URL, or None when url isn't one"""
    marker = marker or settings.LEGACY_IMAGE_MARKER
    if not url or marker not in url:
        return None
    tail = url.split(marker, 1)[1].split("?", 1)[0].split("#", 1)[0]
    filename = tail.rstrip("/").rsplit("/", 1)[-1]
    return filename or None


def repaired_url(url: Optional[str], bucket: str, folder: str, marker: Optional[str] = None) -> Optional[str]:
    """Storage URL replacing a legacy upload URL, keeping the file name"""
    filename = legacy_filename(url, marker)
    if not filename:
        return None
    return public_storage_url(bucket, f"{folder}/{filename}")
