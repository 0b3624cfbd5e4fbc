"""
Public form schemas: contact, feedback, newsletter
"""
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from app.schemas.common import RequestModel


class ContactRequest(RequestModel):
    """
    Contact form payload.

    With ``brand_id`` and ``brand_name`` it is a brand inquiry and needs
    name, email and message; otherwise it is a general contact and also
    needs a subject.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    brand_id: Optional[str] = None
    brand_name: Optional[str] = None

    @property
    def is_brand_contact(self) -> bool:
        return bool(self.brand_id and self.brand_name)

    @model_validator(mode="after")
    def _require_fields(self):
        required = ["name", "email", "message"]
        if not self.is_brand_contact:
            required.append("subject")
        if any(not getattr(self, field) for field in required):
            raise ValueError("All fields are required")
        return self


class FeedbackCreate(RequestModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    feedback_type: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class NewsletterSubscribe(RequestModel):
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    source: str = "website"
