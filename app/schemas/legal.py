"""
Legal document schemas
"""
from datetime import date
from typing import Optional

from pydantic import Field

from app.models.enums import LegalDocumentType
from app.schemas.common import RequestModel


class LegalDocumentCreate(RequestModel):
    document_type: LegalDocumentType
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    effective_date: Optional[date] = None


class LegalDocumentUpdate(RequestModel):
    id: str = Field(..., min_length=1)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    effective_date: Optional[date] = None
    is_active: Optional[bool] = None
