"""
Admin schemas
"""
from typing import List

from pydantic import EmailStr

from app.models.enums import ApplicationStatus
from app.models.profile import UserRole
from app.schemas.common import RequestModel


class UserUpsert(RequestModel):
    """Grant a role (and brands) to a profile by email"""
    email: EmailStr
    role: UserRole
    owned_brands: List[str] = []


class ApplicationStatusUpdate(RequestModel):
    status: ApplicationStatus
