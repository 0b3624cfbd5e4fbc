"""
Studio inbox endpoints
"""
from typing import Any, Dict, List

from fastapi import APIRouter, status

from app.api.deps import InboxServiceDep, StudioProfileDep
from app.schemas.common import MessageResponse
from app.schemas.inbox import InquiryUpdate, ReplyCreate


router = APIRouter()


@router.get("", summary="Inquiries and notifications")
async def list_inbox(profile: StudioProfileDep, inbox_service: InboxServiceDep) -> Dict[str, Any]:
    return await inbox_service.list_inbox(profile)


@router.get("/stats", summary="Inbox counters")
async def inbox_stats(profile: StudioProfileDep, inbox_service: InboxServiceDep) -> Dict[str, Any]:
    """Totals, today and this week (weeks start on Sunday, UTC) and breakdowns"""
    return await inbox_service.stats(profile)


@router.get("/{inquiry_id}", summary="Inquiry with replies")
async def get_inquiry(inquiry_id: str, profile: StudioProfileDep, inbox_service: InboxServiceDep) -> Dict[str, Any]:
    return await inbox_service.get_inquiry(profile, inquiry_id)


@router.put("/{inquiry_id}", summary="Update inquiry")
async def update_inquiry(
    inquiry_id: str,
    update: InquiryUpdate,
    profile: StudioProfileDep,
    inbox_service: InboxServiceDep,
) -> Dict[str, Any]:
    return await inbox_service.update_inquiry(profile, inquiry_id, update)


@router.delete("/{inquiry_id}", response_model=MessageResponse, summary="Delete inquiry")
async def delete_inquiry(inquiry_id: str, profile: StudioProfileDep, inbox_service: InboxServiceDep) -> MessageResponse:
    await inbox_service.delete_inquiry(profile, inquiry_id)
    return MessageResponse(message="Inquiry deleted successfully")


@router.get("/{inquiry_id}/replies", summary="Replies on an inquiry")
async def list_replies(
    inquiry_id: str,
    profile: StudioProfileDep,
    inbox_service: InboxServiceDep,
) -> List[Dict[str, Any]]:
    return await inbox_service.list_replies(profile, inquiry_id)


@router.post("/{inquiry_id}/replies", status_code=status.HTTP_201_CREATED, summary="Reply to an inquiry")
async def add_reply(
    inquiry_id: str,
    reply_in: ReplyCreate,
    profile: StudioProfileDep,
    inbox_service: InboxServiceDep,
) -> Dict[str, Any]:
    return await inbox_service.add_reply(profile, inquiry_id, reply_in)
