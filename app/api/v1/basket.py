"""
Shopping basket of the signed-in user
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Query, status

from app.api.deps import BasketServiceDep, CurrentUserDep
from app.schemas.basket import BasketItemCreate, BasketItemUpdate
from app.schemas.common import MessageResponse


router = APIRouter()


@router.get("", summary="Get basket")
async def get_basket(user: CurrentUserDep, basket_service: BasketServiceDep) -> Dict[str, Any]:
    """Baskets grouped by brand, each line with its product, plus totals"""
    return await basket_service.get_baskets(user.id)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Add to basket")
async def add_to_basket(
    item_in: BasketItemCreate,
    user: CurrentUserDep,
    basket_service: BasketServiceDep,
) -> Dict[str, Any]:
    return await basket_service.add_item(user.id, item_in)


@router.patch("/items/{item_id}", summary="Change quantity")
async def update_basket_item(
    item_id: str,
    item_update: BasketItemUpdate,
    user: CurrentUserDep,
    basket_service: BasketServiceDep,
) -> Dict[str, Any]:
    return await basket_service.update_quantity(user.id, item_id, item_update.quantity)


@router.delete("/items/{item_id}", response_model=MessageResponse, summary="Remove from basket")
async def remove_basket_item(item_id: str, user: CurrentUserDep, basket_service: BasketServiceDep) -> MessageResponse:
    await basket_service.remove_item(user.id, item_id)
    return MessageResponse(message="Item removed from basket")


@router.delete("/clear", response_model=MessageResponse, summary="Clear a basket")
async def clear_basket(
    user: CurrentUserDep,
    basket_service: BasketServiceDep,
    basket_id: Optional[str] = Query(None, alias="basketId"),
) -> MessageResponse:
    await basket_service.clear_basket(user.id, basket_id)
    return MessageResponse(message="Basket cleared successfully")


@router.post("/submit", summary="Place orders for the basket")
async def submit_basket(user: CurrentUserDep, basket_service: BasketServiceDep) -> Dict[str, Any]:
    """One pending order per brand; the owning brand admin is notified"""
    return await basket_service.submit(user.id, user.email)
