"""
Brand API schemas
"""
from typing import Optional

from pydantic import Field

from app.schemas.common import RequestModel


class BrandCreate(RequestModel):
    """Schema for creating a brand from the studio"""
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    long_description: Optional[str] = None
    price_range: Optional[str] = None
    image: Optional[str] = None
    is_verified: bool = False
    website: Optional[str] = None
    instagram: Optional[str] = None
    founded_year: Optional[int] = Field(None, ge=1800, le=2100)
    contact_email: Optional[str] = None


class BrandUpdate(RequestModel):
    """Schema for updating a brand - all fields optional"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    long_description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    price_range: Optional[str] = None
    image: Optional[str] = None
    is_verified: Optional[bool] = None
    website: Optional[str] = None
    instagram: Optional[str] = None
    founded_year: Optional[int] = Field(None, ge=1800, le=2100)
    contact_email: Optional[str] = None
    commission_rate: Optional[float] = Field(None, ge=0, le=100)
