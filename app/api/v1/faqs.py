"""
FAQ endpoints
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import FaqServiceDep, SuperAdminProfileDep
from app.schemas.common import MessageResponse
from app.schemas.faq import FaqCreate, FaqUpdate


router = APIRouter()


@router.get("", summary="List FAQs")
async def list_faqs(
    faq_service: FaqServiceDep,
    page_location: Optional[str] = Query(None, description="Page the FAQs are shown on; 'all' matches everywhere"),
    category: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(True),
    include_inactive: bool = Query(False),
) -> List[Dict[str, Any]]:
    return await faq_service.list_faqs(
        page_location=page_location,
        category=category,
        is_active=is_active,
        include_inactive=include_inactive,
    )


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create FAQ")
async def create_faq(faq_in: FaqCreate, profile: SuperAdminProfileDep, faq_service: FaqServiceDep) -> Dict[str, Any]:
    return await faq_service.create_faq(profile, faq_in)


@router.put("", summary="Update FAQ")
async def update_faq(faq_update: FaqUpdate, profile: SuperAdminProfileDep, faq_service: FaqServiceDep) -> Dict[str, Any]:
    return await faq_service.update_faq(profile, faq_update)


@router.delete("", response_model=MessageResponse, summary="Delete FAQ")
async def delete_faq(
    profile: SuperAdminProfileDep,
    faq_service: FaqServiceDep,
    faq_id: str = Query(..., alias="id", min_length=1),
) -> MessageResponse:
    await faq_service.delete_faq(profile, faq_id)
    return MessageResponse(message="FAQ deleted successfully")
