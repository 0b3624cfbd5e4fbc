"""
Public forms: contact, feedback and newsletter
"""
from typing import Any, Dict

from fastapi import APIRouter, Request, status

from app.api.deps import ContactServiceDep, FeedbackServiceDep, NewsletterServiceDep
from app.core.config import settings
from app.core.rate_limit import limiter
from app.schemas.common import MessageResponse
from app.schemas.contact import ContactRequest, FeedbackCreate, NewsletterSubscribe


router = APIRouter()


@router.post("/contact", summary="Contact form")
@limiter.limit(settings.PUBLIC_FORM_RATE_LIMIT)
async def submit_contact(
    request: Request,
    form: ContactRequest,
    contact_service: ContactServiceDep,
) -> Dict[str, Any]:
    """
    Send a message to a brand, or to the OmaHub team.

    Brand messages land in the brand's studio inbox and create a scored lead.
    """
    return await contact_service.submit(form)


@router.post("/feedback", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.PUBLIC_FORM_RATE_LIMIT)
async def submit_feedback(
    request: Request,
    feedback_in: FeedbackCreate,
    feedback_service: FeedbackServiceDep,
) -> MessageResponse:
    feedback = await feedback_service.submit(feedback_in)
    return MessageResponse(message="Thank you for your feedback!", data={"id": feedback.get("id")})


@router.post("/newsletter/subscribe", summary="Subscribe to the newsletter")
@limiter.limit(settings.PUBLIC_FORM_RATE_LIMIT)
async def subscribe_newsletter(
    request: Request,
    subscription: NewsletterSubscribe,
    newsletter_service: NewsletterServiceDep,
) -> Dict[str, Any]:
    return await newsletter_service.subscribe(subscription)
