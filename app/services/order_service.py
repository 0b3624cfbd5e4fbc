"""
Order service: a customer's orders, made-to-measure requests and the
studio order queues
"""

from collections import defaultdict
from typing import Any, Dict, List, Optional

from app.core.exceptions import BadRequestError, NotFoundError
from app.core.logging import log
from app.core.pagination import paginate
from app.core.permissions import require_studio
from app.models.enums import OrderStatus
from app.models.profile import Profile
from app.repositories.brand import BrandRepository
from app.repositories.order import OrderItemRepository, OrderRepository, TailoredOrderRepository
from app.repositories.product import ProductRepository
from app.schemas.order import CustomOrderCreate
from app.utils.pricing import effective_price
from app.utils.timestamps import utc_now_iso

CUSTOM_ORDER_CURRENCY = "USD"


def order_number(order_id: str) -> str:
    """Customer-facing reference: OMH- and the id's last eight characters"""
    return f"OMH-{order_id[-8:].upper()}"


class OrderService:
    """Basket orders and tailored orders"""

    def __init__(self, client: Any):
        self.order_repo = OrderRepository(client)
        self.order_item_repo = OrderItemRepository(client)
        self.tailored_repo = TailoredOrderRepository(client)
        self.product_repo = ProductRepository(client)
        self.brand_repo = BrandRepository(client)

    async def list_orders(self, user_id: str) -> List[Dict[str, Any]]:
        orders = await self.order_repo.for_user(user_id)
        items = await self.order_item_repo.for_orders([order["id"] for order in orders])

        lines: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        for item in items:
            lines[item["order_id"]].append(item)
        return [{**order, "order_items": lines.get(order["id"], [])} for order in orders]

    async def create_custom_order(self, user_id: str, order_in: CustomOrderCreate) -> Dict[str, Any]:
        product = await self.product_repo.get(id=order_in.product_id, columns="id,title,brand_id,price,sale_price")
        if not product:
            raise NotFoundError("Product not found")
        brand = await self.brand_repo.get(id=order_in.brand_id, columns="id,name")
        if not brand:
            raise NotFoundError("Brand not found")
        if product.get("brand_id") != brand["id"]:
            raise BadRequestError("Product does not belong to this brand")

        order = await self.tailored_repo.create(
            {
                "user_id": user_id,
                "product_id": product["id"],
                "brand_id": brand["id"],
                "status": OrderStatus.PENDING.value,
                "total_amount": order_in.total_amount or effective_price(product),
                "currency": CUSTOM_ORDER_CURRENCY,
                "customer_notes": order_in.customer_notes or "",
                "measurements": {},
                "delivery_address": order_in.delivery_address,
            }
        )
        number = order_number(str(order["id"]))
        log.info("Custom order submitted", user_id=user_id, brand_id=brand["id"], order_number=number)
        return {
            "success": True,
            "order": order,
            "order_number": number,
            "message": "Order submitted successfully",
        }

    async def list_custom_orders(self, user_id: str) -> List[Dict[str, Any]]:
        return await self.tailored_repo.for_user(user_id)

    async def _studio_page(
        self, repo, profile: Profile, *, page: int, limit: int, offset: int, end: int, status: Optional[str]
    ) -> Dict[str, Any]:
        require_studio(profile)
        scope = profile.brand_scope()
        if scope == []:
            return paginate([], 0, page, limit)
        rows, total = await repo.scoped_page(offset=offset, end=end, scope=scope, status=status)
        return paginate(rows, total, page, limit)

    async def _set_status(self, repo, profile: Profile, order_id: str, status: OrderStatus) -> Dict[str, Any]:
        require_studio(profile)
        if not await repo.get_scoped(order_id, profile.brand_scope()):
            raise NotFoundError(f"{repo.resource_name} not found")
        order = await repo.update(id=order_id, obj_in={"status": status.value, "updated_at": utc_now_iso()})
        log.info("Order status changed", table=repo.table, order_id=order_id, status=status.value, user_id=profile.id)
        return order

    async def studio_orders(self, profile: Profile, **params) -> Dict[str, Any]:
        return await self._studio_page(self.order_repo, profile, **params)

    async def studio_custom_orders(self, profile: Profile, **params) -> Dict[str, Any]:
        return await self._studio_page(self.tailored_repo, profile, **params)

    async def update_order_status(self, profile: Profile, order_id: str, status: OrderStatus) -> Dict[str, Any]:
        return await self._set_status(self.order_repo, profile, order_id, status)

    async def update_custom_order_status(self, profile: Profile, order_id: str, status: OrderStatus) -> Dict[str, Any]:
        return await self._set_status(self.tailored_repo, profile, order_id, status)
