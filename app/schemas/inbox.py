"""
Studio inbox schemas
"""
from typing import Optional

from pydantic import Field

from app.models.enums import InquiryStatus
from app.schemas.common import RequestModel


class InquiryUpdate(RequestModel):
    status: Optional[InquiryStatus] = None
    is_read: Optional[bool] = None
    reply: Optional[str] = None


class ReplyCreate(RequestModel):
    message: str = Field(..., min_length=1)
    is_internal_note: bool = False
