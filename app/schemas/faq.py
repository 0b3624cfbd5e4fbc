"""
FAQ schemas
"""
from typing import Optional

from pydantic import Field

from app.schemas.common import RequestModel


class FaqCreate(RequestModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    category: str = "general"
    display_order: int = 0
    page_location: str = "general"
    is_active: bool = True


class FaqUpdate(RequestModel):
    id: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    category: Optional[str] = None
    display_order: Optional[int] = None
    page_location: Optional[str] = None
    is_active: Optional[bool] = None
