"""
Contact form and feedback handling.

A brand contact becomes an inbox inquiry plus a scored lead, so brand owners
see it in the studio and in their pipeline.
"""

from typing import Any, Dict, Optional

from app.core.exceptions import BaseAPIException, NotFoundError
from app.core.logging import log
from app.repositories.brand import BrandRepository
from app.repositories.feedback import FeedbackRepository
from app.repositories.inquiry import InquiryRepository
from app.repositories.lead import LeadInteractionRepository, LeadRepository
from app.schemas.contact import ContactRequest, FeedbackCreate
from app.utils.inquiry_analysis import analyze_inquiry_message
from app.utils.normalization import truncate
from app.utils.timestamps import utc_now_iso


class ContactService:
    """Turns contact form submissions into inquiries and leads"""

    def __init__(self, client: Any):
        self.brand_repo = BrandRepository(client)
        self.inquiry_repo = InquiryRepository(client)
        self.lead_repo = LeadRepository(client)
        self.interaction_repo = LeadInteractionRepository(client)

    async def submit(self, form: ContactRequest) -> Dict[str, Any]:
        if form.is_brand_contact:
            return await self.contact_brand(form)

        log.info("General contact received", email=form.email, subject=form.subject)
        return {
            "success": True,
            "message": "Thank you for your message. We'll get back to you soon!",
            "type": "general_contact",
        }

    async def contact_brand(self, form: ContactRequest) -> Dict[str, Any]:
        brand = await self.brand_repo.get(id=form.brand_id, columns="id,name,category")
        if not brand:
            raise NotFoundError("Brand not found")

        analysis = analyze_inquiry_message(form.message, brand.get("category"))
        now = utc_now_iso()

        inquiry = await self.inquiry_repo.create(
            {
                "brand_id": form.brand_id,
                "customer_name": form.name,
                "customer_email": form.email,
                "subject": form.subject or f"New Contact from {form.name}",
                "message": form.message,
                "inquiry_type": "general",
                "priority": analysis.priority,
                "status": "unread",
                "source": "website",
                "created_at": now,
            }
        )

        lead = await self._record_lead(form, analysis, now)

        log.info(
            "Brand contact recorded",
            brand_id=form.brand_id,
            inquiry_id=inquiry.get("id"),
            lead_id=lead.get("id") if lead else None,
            estimated_value=analysis.estimated_value,
        )
        return {
            "success": True,
            "message": f"Your message has been sent to {brand['name']}. They will get back to you soon!",
            "data": {
                "inquiry_id": inquiry.get("id"),
                "lead_id": lead.get("id") if lead else None,
                "brand": brand["name"],
                "estimated_value": analysis.estimated_value,
                "priority": analysis.priority,
            },
        }

    async def _record_lead(self, form: ContactRequest, analysis, now: str) -> Optional[Dict[str, Any]]:
        """Lead and first interaction; the inquiry stands even when this fails"""
        try:
            lead = await self.lead_repo.create(
                {
                    "brand_id": form.brand_id,
                    "customer_name": form.name,
                    "customer_email": form.email,
                    "source": "website",
                    "lead_type": analysis.lead_type,
                    "status": "new",
                    "priority": analysis.priority,
                    "estimated_value": analysis.estimated_value,
                    "project_timeline": analysis.project_timeline,
                    "notes": f"Original message: {form.message}",
                    "created_at": now,
                }
            )
        except BaseAPIException as e:
            log.error("Failed to create lead from contact", brand_id=form.brand_id, error=e.detail)
            return None

        try:
            await self.interaction_repo.create(
                {
                    "lead_id": lead.get("id"),
                    "interaction_type": "email",
                    "description": f"Initial contact: {truncate(form.message, 100)}",
                    "interaction_date": now,
                }
            )
        except BaseAPIException as e:
            log.warning("Failed to log lead interaction", lead_id=lead.get("id"), error=e.detail)

        return lead


class FeedbackService:
    def __init__(self, client: Any):
        self.feedback_repo = FeedbackRepository(client)

    async def submit(self, feedback_in: FeedbackCreate) -> Dict[str, Any]:
        feedback = await self.feedback_repo.create(feedback_in, status="new", created_at=utc_now_iso())
        log.info("Feedback received", feedback_type=feedback_in.feedback_type, feedback_id=feedback.get("id"))
        return feedback
