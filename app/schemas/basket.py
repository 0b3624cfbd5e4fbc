"""
Basket schemas
"""
from typing import Optional

from pydantic import AliasChoices, Field

from app.schemas.common import RequestModel


class BasketItemCreate(RequestModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1, le=99)
    size: Optional[str] = None
    # The web client spells it "colour"
    color: Optional[str] = Field(None, validation_alias=AliasChoices("colour", "color"))


class BasketItemUpdate(RequestModel):
    quantity: int = Field(..., ge=1, le=99)
