"""
Order schemas
"""
from typing import Any, Dict, Optional

from pydantic import Field

from app.models.enums import OrderStatus
from app.schemas.common import RequestModel


class CustomOrderCreate(RequestModel):
    """A made-to-measure request for one product"""
    product_id: str = Field(..., min_length=1)
    brand_id: str = Field(..., min_length=1)
    delivery_address: Dict[str, Any]
    customer_notes: Optional[str] = Field(None, max_length=2000)
    total_amount: Optional[float] = Field(None, gt=0)


class OrderStatusUpdate(RequestModel):
    status: OrderStatus
