"""
Lead endpoints
"""
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import APIRouter, Query, Request, status

from app.api.deps import LeadServiceDep, PaginationDep, StudioProfileDep
from app.core.config import settings
from app.core.rate_limit import limiter
from app.schemas.common import MessageResponse
from app.schemas.lead import LeadCreate, LeadUpdateRequest


router = APIRouter()


class LeadAction(str, Enum):
    LIST = "list"
    ANALYTICS = "analytics"
    COMMISSION = "commission"


@router.post("", status_code=status.HTTP_201_CREATED, summary="Capture a lead")
@limiter.limit(settings.PUBLIC_FORM_RATE_LIMIT)
async def create_lead(request: Request, lead_in: LeadCreate, lead_service: LeadServiceDep) -> Dict[str, Any]:
    lead = await lead_service.create_lead(lead_in)
    return {"success": True, "lead": lead}


@router.get("", summary="Studio lead views")
async def get_leads(
    profile: StudioProfileDep,
    lead_service: LeadServiceDep,
    pagination: PaginationDep,
    action: LeadAction = Query(LeadAction.LIST),
    status_filter: Optional[str] = Query(None, alias="status"),
    source: Optional[str] = Query(None),
    priority: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
) -> Dict[str, Any]:
    """
    Leads for the caller's brands.

    - **action=list**: filtered, paginated leads (``all`` disables a filter)
    - **action=analytics**: pipeline totals
    - **action=commission**: commission owed on converted leads
    """
    if action == LeadAction.ANALYTICS:
        return await lead_service.analytics(profile)
    if action == LeadAction.COMMISSION:
        return await lead_service.commission(profile)

    return await lead_service.list_leads(
        profile,
        page=pagination.page,
        limit=pagination.limit,
        offset=pagination.offset,
        end=pagination.end,
        status=status_filter,
        source=source,
        priority=priority,
        search=search,
    )


@router.put("", summary="Update a lead")
async def update_lead(
    payload: LeadUpdateRequest,
    profile: StudioProfileDep,
    lead_service: LeadServiceDep,
) -> Dict[str, Any]:
    lead = await lead_service.update_lead(profile, payload.id, payload.data)
    return {"success": True, "lead": lead}


@router.delete("", response_model=MessageResponse, summary="Delete a lead")
async def delete_lead(
    profile: StudioProfileDep,
    lead_service: LeadServiceDep,
    lead_id: str = Query(..., alias="id", min_length=1),
) -> MessageResponse:
    await lead_service.delete_lead(profile, lead_id)
    return MessageResponse(message="Lead deleted successfully")
