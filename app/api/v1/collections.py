"""
Collection (catalogue) endpoints
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query

from app.api.deps import CollectionServiceDep, OptionalUserDep, PaginationDep
from app.schemas.common import PaginatedResponse


router = APIRouter()


@router.get("", response_model=PaginatedResponse[Dict[str, Any]], summary="List collections")
async def list_collections(
    collection_service: CollectionServiceDep,
    pagination: PaginationDep,
    brand_id: Optional[str] = Query(None, description="Only collections of this brand"),
) -> Dict[str, Any]:
    return await collection_service.list_collections(
        page=pagination.page,
        limit=pagination.limit,
        offset=pagination.offset,
        end=pagination.end,
        brand_id=brand_id,
    )


@router.get("/{collection_id}", summary="Get collection with its products")
async def get_collection(collection_id: str, collection_service: CollectionServiceDep) -> Dict[str, Any]:
    return await collection_service.get_collection(collection_id)


@router.get(
    "/{collection_id}/recommendations",
    summary="Recommended products",
    description="Shuffled in-stock picks, personalised with favourite brands when signed in"
)
async def get_recommendations(
    collection_id: str,
    collection_service: CollectionServiceDep,
    user: OptionalUserDep,
) -> List[Dict[str, Any]]:
    return await collection_service.recommendations(collection_id, user.id if user else None)
