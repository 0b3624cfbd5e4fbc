"""
Favourites of the signed-in user
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentUserDep, FavouriteServiceDep
from app.models.enums import FavouriteItemType
from app.schemas.common import MessageResponse
from app.schemas.favourite import FavouriteCreate


router = APIRouter()


@router.get("", summary="List favourites")
async def list_favourites(user: CurrentUserDep, favourite_service: FavouriteServiceDep) -> List[Dict[str, Any]]:
    """Saved brands, catalogues and products with their current details"""
    return await favourite_service.list_favourites(user.id)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Add favourite")
async def add_favourite(
    favourite_in: FavouriteCreate,
    user: CurrentUserDep,
    favourite_service: FavouriteServiceDep,
) -> Dict[str, Any]:
    return await favourite_service.add_favourite(user.id, favourite_in.item_id, favourite_in.item_type.value)


@router.delete("", response_model=MessageResponse, summary="Remove favourite")
async def remove_favourite(
    user: CurrentUserDep,
    favourite_service: FavouriteServiceDep,
    item_id: str = Query(..., min_length=1),
    item_type: FavouriteItemType = Query(...),
) -> MessageResponse:
    await favourite_service.remove_favourite(user.id, item_id, item_type.value)
    return MessageResponse(message="Removed from favourites")
