"""
Lead API schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from app.models.enums import LeadStatus, Priority
from app.schemas.common import RequestModel


class LeadCreate(RequestModel):
    """Lead captured from a public form or booking flow"""
    brand_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    source: str = Field(..., min_length=1)
    lead_type: str = Field(..., min_length=1)
    notes: Optional[str] = None
    estimated_value: Optional[float] = Field(None, ge=0)
    priority: Priority = Priority.NORMAL


class LeadUpdate(RequestModel):
    """Editable lead fields - all optional"""
    status: Optional[LeadStatus] = None
    priority: Optional[Priority] = None
    lead_type: Optional[str] = None
    source: Optional[str] = None
    notes: Optional[str] = None
    estimated_value: Optional[float] = Field(None, ge=0)
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = None
    next_follow_up: Optional[datetime] = None


class LeadUpdateRequest(RequestModel):
    id: str = Field(..., min_length=1)
    data: LeadUpdate
