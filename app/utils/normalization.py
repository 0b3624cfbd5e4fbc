"""
Text normalization utilities for consistent data processing
"""
import re
import unicodedata
from typing import Optional


def normalize_text(text: str) -> str:
    """
    Normalize text for consistency:
    - Remove extra whitespace
    - Convert to lowercase
    - Remove accents
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFKD", text)
    text = "".join(char for char in text if not unicodedata.combining(char))
    text = text.lower()

    return " ".join(text.split())


def slugify(text: str) -> str:
    """
    URL-friendly id for a brand name:
    "Maison Adèle & Co." -> "maison-adele-co"
    """
    slug = re.sub(r"[^a-z0-9]+", "-", normalize_text(text))
    return slug.strip("-")


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def truncate(text: str, length: int = 100, suffix: str = "...") -> str:
    """Cut text to length, marking the cut"""
    if len(text) <= length:
        return text
    return text[:length] + suffix
