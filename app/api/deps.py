"""
API Dependencies for dependency injection
"""
import uuid
from typing import Annotated, Any, Optional

from fastapi import Depends, Header, Query, Request

from app.core.config import settings
from app.core.exceptions import NotFoundError, UnauthorizedError
from app.core.logging import log
from app.core.permissions import require_admin, require_studio, require_super_admin
from app.core.security import AuthUser, extract_access_token, verify_access_token
from app.core.supabase import get_supabase
from app.models.profile import Profile, UserRole
from app.repositories.profile import ProfileRepository
from app.schemas.common import PaginationParams
from app.services import (
    AdminService,
    ApplicationService,
    BasketService,
    BrandService,
    CollectionService,
    ContactService,
    FaqService,
    FavouriteService,
    FeedbackService,
    ImageHostingService,
    InboxService,
    LeadService,
    LegalDocumentService,
    NewsletterService,
    OrderService,
    ProductService,
    ReviewReplyService,
    ReviewService,
)


# Supabase client
SupabaseDep = Annotated[Any, Depends(get_supabase)]


# Authentication
async def get_current_user(request: Request, client: SupabaseDep) -> AuthUser:
    """Verify the bearer token or session cookie"""
    token = extract_access_token(request)
    if not token:
        raise UnauthorizedError("Authentication required")
    return await verify_access_token(client, token)


async def get_current_user_optional(request: Request, client: SupabaseDep) -> Optional[AuthUser]:
    """Optional authentication - returns None if no valid token"""
    token = extract_access_token(request)
    if not token:
        return None
    try:
        return await verify_access_token(client, token)
    except UnauthorizedError:
        return None


CurrentUserDep = Annotated[AuthUser, Depends(get_current_user)]
OptionalUserDep = Annotated[Optional[AuthUser], Depends(get_current_user_optional)]


async def get_current_profile(user: CurrentUserDep, client: SupabaseDep) -> Profile:
    """
    Profile of the authenticated user.

    Accounts listed in SUPER_ADMIN_FALLBACK_EMAILS keep super admin access
    even before their profile row exists.
    """
    profile = await ProfileRepository(client).get_profile(user.id)
    if profile:
        return profile

    fallback = {email.lower() for email in settings.SUPER_ADMIN_FALLBACK_EMAILS}
    if user.email and user.email.lower() in fallback:
        log.warning("Using fallback super admin profile", user_id=user.id, email=user.email)
        return Profile(id=user.id, email=user.email, role=UserRole.SUPER_ADMIN.value)

    raise NotFoundError("Profile not found")


ProfileDep = Annotated[Profile, Depends(get_current_profile)]


async def get_studio_profile(profile: ProfileDep) -> Profile:
    return require_studio(profile)


async def get_admin_profile(profile: ProfileDep) -> Profile:
    return require_admin(profile)


async def get_super_admin_profile(profile: ProfileDep) -> Profile:
    return require_super_admin(profile)


StudioProfileDep = Annotated[Profile, Depends(get_studio_profile)]
AdminProfileDep = Annotated[Profile, Depends(get_admin_profile)]
SuperAdminProfileDep = Annotated[Profile, Depends(get_super_admin_profile)]


# Services
async def get_brand_service(client: SupabaseDep) -> BrandService:
    return BrandService(client)


async def get_product_service(client: SupabaseDep) -> ProductService:
    return ProductService(client)


async def get_collection_service(client: SupabaseDep) -> CollectionService:
    return CollectionService(client)


async def get_review_service(client: SupabaseDep) -> ReviewService:
    return ReviewService(client)


async def get_favourite_service(client: SupabaseDep) -> FavouriteService:
    return FavouriteService(client)


async def get_contact_service(client: SupabaseDep) -> ContactService:
    return ContactService(client)


async def get_feedback_service(client: SupabaseDep) -> FeedbackService:
    return FeedbackService(client)


async def get_lead_service(client: SupabaseDep) -> LeadService:
    return LeadService(client)


async def get_newsletter_service(client: SupabaseDep) -> NewsletterService:
    return NewsletterService(client)


async def get_faq_service(client: SupabaseDep) -> FaqService:
    return FaqService(client)


async def get_inbox_service(client: SupabaseDep) -> InboxService:
    return InboxService(client)


async def get_application_service(client: SupabaseDep) -> ApplicationService:
    return ApplicationService(client)


async def get_admin_service(client: SupabaseDep) -> AdminService:
    return AdminService(client)


async def get_image_hosting_service(client: SupabaseDep) -> ImageHostingService:
    return ImageHostingService(client)


async def get_basket_service(client: SupabaseDep) -> BasketService:
    return BasketService(client)


async def get_order_service(client: SupabaseDep) -> OrderService:
    return OrderService(client)


async def get_review_reply_service(client: SupabaseDep) -> ReviewReplyService:
    return ReviewReplyService(client)


async def get_legal_document_service(client: SupabaseDep) -> LegalDocumentService:
    return LegalDocumentService(client)


BrandServiceDep = Annotated[BrandService, Depends(get_brand_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
CollectionServiceDep = Annotated[CollectionService, Depends(get_collection_service)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
FavouriteServiceDep = Annotated[FavouriteService, Depends(get_favourite_service)]
ContactServiceDep = Annotated[ContactService, Depends(get_contact_service)]
FeedbackServiceDep = Annotated[FeedbackService, Depends(get_feedback_service)]
LeadServiceDep = Annotated[LeadService, Depends(get_lead_service)]
NewsletterServiceDep = Annotated[NewsletterService, Depends(get_newsletter_service)]
FaqServiceDep = Annotated[FaqService, Depends(get_faq_service)]
InboxServiceDep = Annotated[InboxService, Depends(get_inbox_service)]
ApplicationServiceDep = Annotated[ApplicationService, Depends(get_application_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
ImageHostingServiceDep = Annotated[ImageHostingService, Depends(get_image_hosting_service)]
BasketServiceDep = Annotated[BasketService, Depends(get_basket_service)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
ReviewReplyServiceDep = Annotated[ReviewReplyService, Depends(get_review_reply_service)]
LegalDocumentServiceDep = Annotated[LegalDocumentService, Depends(get_legal_document_service)]


# Common parameters
async def get_pagination(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"),
) -> PaginationParams:
    """Get pagination parameters"""
    return PaginationParams(page=page, limit=limit)


PaginationDep = Annotated[PaginationParams, Depends(get_pagination)]


# Request ID and correlation
async def get_request_id(
    request: Request,
    x_request_id: Optional[str] = Header(None, alias="X-Request-ID"),
) -> str:
    """Request ID set by the middleware, the header, or a new one"""
    return getattr(request.state, "request_id", None) or x_request_id or str(uuid.uuid4())


RequestIdDep = Annotated[str, Depends(get_request_id)]
