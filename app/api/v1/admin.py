"""
Admin endpoints: review moderation and replies, users and maintenance jobs
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, BackgroundTasks, Query, status

from app.api.deps import (
    AdminServiceDep,
    PaginationDep,
    ReviewReplyServiceDep,
    StudioProfileDep,
    SuperAdminProfileDep,
)
from app.core.cache import invalidate_namespace
from app.core.logging import log
from app.schemas.admin import UserUpsert
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.review import ReviewReplyCreate, ReviewReplyUpdate
from app.services.brand_service import BRAND_CACHE_NAMESPACE


router = APIRouter()


@router.get("/reviews", response_model=PaginatedResponse[Dict[str, Any]], summary="Reviews for moderation")
async def list_reviews(
    profile: StudioProfileDep,
    admin_service: AdminServiceDep,
    pagination: PaginationDep,
    brand_id: Optional[str] = Query(None),
) -> Dict[str, Any]:
    return await admin_service.list_reviews(
        profile,
        page=pagination.page,
        limit=pagination.limit,
        offset=pagination.offset,
        end=pagination.end,
        brand_id=brand_id,
    )


@router.delete("/reviews", response_model=MessageResponse, summary="Delete review")
async def delete_review(
    profile: StudioProfileDep,
    admin_service: AdminServiceDep,
    review_id: str = Query(..., alias="id", min_length=1),
) -> MessageResponse:
    await admin_service.delete_review(profile, review_id)
    return MessageResponse(message="Review deleted successfully")


@router.get("/reviews/replies", summary="Replies on a review")
async def list_review_replies(
    profile: StudioProfileDep,
    reply_service: ReviewReplyServiceDep,
    review_id: str = Query(..., min_length=1),
) -> List[Dict[str, Any]]:
    return await reply_service.list_replies(profile, review_id)


@router.post("/reviews/replies", status_code=status.HTTP_201_CREATED, summary="Reply to a review")
async def create_review_reply(
    reply_in: ReviewReplyCreate,
    profile: StudioProfileDep,
    reply_service: ReviewReplyServiceDep,
) -> Dict[str, Any]:
    return await reply_service.create_reply(profile, reply_in)


@router.put("/reviews/replies", summary="Edit a reply")
async def update_review_reply(
    reply_in: ReviewReplyUpdate,
    profile: StudioProfileDep,
    reply_service: ReviewReplyServiceDep,
) -> Dict[str, Any]:
    return await reply_service.update_reply(profile, reply_in)


@router.delete("/reviews/replies", response_model=MessageResponse, summary="Delete a reply")
async def delete_review_reply(
    profile: StudioProfileDep,
    reply_service: ReviewReplyServiceDep,
    reply_id: str = Query(..., alias="id", min_length=1),
) -> MessageResponse:
    await reply_service.delete_reply(profile, reply_id)
    return MessageResponse(message="Reply deleted successfully")

@router.get("/users", summary="List profiles")
async def list_users(profile: SuperAdminProfileDep, admin_service: AdminServiceDep) -> List[Dict[str, Any]]:
    return await admin_service.list_users(profile)


@router.post("/users", summary="Grant a role by email")
async def upsert_user(
    user_in: UserUpsert,
    profile: SuperAdminProfileDep,
    admin_service: AdminServiceDep,
) -> Dict[str, Any]:
    return await admin_service.upsert_user(profile, user_in)


@router.delete("/users", response_model=MessageResponse, summary="Delete profile")
async def delete_user(
    profile: SuperAdminProfileDep,
    admin_service: AdminServiceDep,
    user_id: str = Query(..., alias="id", min_length=1),
) -> MessageResponse:
    await admin_service.delete_user(profile, user_id)
    return MessageResponse(message="User deleted successfully")


@router.post("/sync-super-admin-brands", summary="Give super admins every brand")
async def sync_super_admin_brands(profile: SuperAdminProfileDep, admin_service: AdminServiceDep) -> Dict[str, Any]:
    log.info("Super admin brand sync requested", user_id=profile.id)
    return await admin_service.sync_super_admin_brands()


@router.post("/repair-images", summary="Rewrite legacy image URLs")
async def repair_images(
    profile: SuperAdminProfileDep,
    admin_service: AdminServiceDep,
    background_tasks: BackgroundTasks,
    dry_run: bool = Query(False),
) -> Dict[str, Any]:
    log.info("Image repair requested", user_id=profile.id, dry_run=dry_run)
    results = await admin_service.repair_images(dry_run=dry_run)
    if not dry_run and results["total"]:
        background_tasks.add_task(invalidate_namespace, BRAND_CACHE_NAMESPACE)
    return {"success": True, "dry_run": dry_run, "results": results}
