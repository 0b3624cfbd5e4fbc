"""
Review API schemas
"""
from datetime import date
from typing import Optional

from pydantic import Field

from app.schemas.common import RequestModel


class ReviewCreate(RequestModel):
    brand_id: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1, max_length=255)
    comment: str = Field(..., min_length=1)
    rating: float = Field(..., gt=0, le=5)
    review_date: Optional[date] = Field(None, alias="date")
    user_id: Optional[str] = None


class ReviewReplyCreate(RequestModel):
    review_id: str = Field(..., min_length=1)
    reply_text: str = Field(..., min_length=1, max_length=2000)


class ReviewReplyUpdate(RequestModel):
    reply_id: str = Field(..., min_length=1)
    reply_text: str = Field(..., min_length=1, max_length=2000)
