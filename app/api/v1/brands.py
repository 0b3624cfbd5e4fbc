"""
Public brand directory endpoints
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Query

from app.api.deps import BrandServiceDep, PaginationDep, ProfileDep, RequestIdDep
from app.core.cache import invalidate_namespace
from app.core.logging import log
from app.schemas.common import PaginatedResponse
from app.services.brand_service import BRAND_CACHE_NAMESPACE


router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[Dict[str, Any]],
    summary="List brands",
    description="Paginated brand directory with optional filters"
)
async def list_brands(
    brand_service: BrandServiceDep,
    pagination: PaginationDep,
    request_id: RequestIdDep,
    category: Optional[str] = Query(None, description="Exact category"),
    location: Optional[str] = Query(None, description="Partial location match"),
    q: Optional[str] = Query(None, description="Search name and description"),
    verified: Optional[bool] = Query(None, description="Only verified (or unverified) brands"),
) -> Dict[str, Any]:
    """
    List brands with pagination and filters.

    - **category**: exact category
    - **location**: case-insensitive partial match
    - **q**: search brand names and descriptions
    - **page** / **limit**: pagination (limit max 100)
    """
    log.info("Listing brands", request_id=request_id, query=q, category=category, location=location)
    return await brand_service.list_brands(
        page=pagination.page,
        limit=pagination.limit,
        offset=pagination.offset,
        end=pagination.end,
        category=category,
        location=location,
        q=q,
        verified=verified,
    )


@router.get("/{brand_id}", summary="Get brand")
async def get_brand(brand_id: str, brand_service: BrandServiceDep) -> Dict[str, Any]:
    return await brand_service.get_brand(brand_id)


@router.get(
    "/{brand_id}/products",
    summary="Brand products",
    description="Products shown on a brand page with their pricing summary"
)
async def get_brand_products(brand_id: str, brand_service: BrandServiceDep) -> Dict[str, Any]:
    return await brand_service.get_brand_products(brand_id)


@router.delete("/{brand_id}", summary="Delete brand")
async def delete_brand(
    brand_id: str,
    brand_service: BrandServiceDep,
    profile: ProfileDep,
    background_tasks: BackgroundTasks,
) -> Dict[str, Any]:
    """
    Delete a brand.

    Admins may delete any brand; brand owners only their own.
    """
    brand = await brand_service.delete_brand(profile, brand_id)
    background_tasks.add_task(invalidate_namespace, BRAND_CACHE_NAMESPACE)
    return {"success": True, "message": f"Brand '{brand.get('name')}' deleted successfully"}
