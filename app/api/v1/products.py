"""
Public product endpoints
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Query

from app.api.deps import PaginationDep, ProductServiceDep
from app.schemas.common import PaginatedResponse


router = APIRouter()


@router.get("", response_model=PaginatedResponse[Dict[str, Any]], summary="List products")
async def list_products(
    product_service: ProductServiceDep,
    pagination: PaginationDep,
    brand_id: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    q: Optional[str] = Query(None, description="Search titles and descriptions"),
) -> Dict[str, Any]:
    return await product_service.list_products(
        page=pagination.page,
        limit=pagination.limit,
        offset=pagination.offset,
        end=pagination.end,
        brand_id=brand_id,
        category=category,
        q=q,
    )


@router.get("/{product_id}", summary="Get product")
async def get_product(product_id: str, product_service: ProductServiceDep) -> Dict[str, Any]:
    return await product_service.get_product(product_id)
