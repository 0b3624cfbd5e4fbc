"""
Product API schemas
"""
from typing import List, Optional

from pydantic import Field

from app.schemas.common import RequestModel


class ProductCreate(RequestModel):
    """Schema for creating a product"""
    brand_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    sale_price: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    images: Optional[List[str]] = None
    in_stock: bool = True
    sizes: Optional[List[str]] = None
    colors: Optional[List[str]] = None
    materials: Optional[List[str]] = None
    is_custom: bool = False
    lead_time: Optional[str] = None
    collection_id: Optional[str] = None
    service_type: Optional[str] = None


class ProductUpdate(RequestModel):
    """Schema for updating a product - all fields optional"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    sale_price: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    images: Optional[List[str]] = None
    in_stock: Optional[bool] = None
    sizes: Optional[List[str]] = None
    colors: Optional[List[str]] = None
    materials: Optional[List[str]] = None
    is_custom: Optional[bool] = None
    lead_time: Optional[str] = None
    collection_id: Optional[str] = None
    service_type: Optional[str] = None
