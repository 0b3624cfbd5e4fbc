"""
Orders of the signed-in user
"""
from typing import Any, Dict, List

from fastapi import APIRouter, status

from app.api.deps import CurrentUserDep, OrderServiceDep
from app.schemas.order import CustomOrderCreate


router = APIRouter()


@router.get("", summary="List orders")
async def list_orders(user: CurrentUserDep, order_service: OrderServiceDep) -> List[Dict[str, Any]]:
    return await order_service.list_orders(user.id)


@router.post("/custom", status_code=status.HTTP_201_CREATED, summary="Request a made-to-measure order")
async def create_custom_order(
    order_in: CustomOrderCreate,
    user: CurrentUserDep,
    order_service: OrderServiceDep,
) -> Dict[str, Any]:
    return await order_service.create_custom_order(user.id, order_in)


@router.get("/custom", summary="List made-to-measure orders")
async def list_custom_orders(user: CurrentUserDep, order_service: OrderServiceDep) -> List[Dict[str, Any]]:
    return await order_service.list_custom_orders(user.id)
