"""
Basket service: the shopping basket and its checkout into per-brand orders
"""

from collections import defaultdict
from typing import Any, Dict, List, Optional

from app.core.exceptions import BadRequestError, BaseAPIException, DatabaseError, ForbiddenError, NotFoundError
from app.core.logging import log
from app.models.enums import OrderStatus
from app.repositories.basket import BasketItemRepository, BasketRepository
from app.repositories.brand import BrandRepository
from app.repositories.inquiry import NotificationRepository
from app.repositories.order import OrderItemRepository, OrderRepository
from app.repositories.product import ProductRepository
from app.repositories.profile import ProfileRepository
from app.schemas.basket import BasketItemCreate
from app.utils.pricing import effective_price
from app.utils.timestamps import utc_now_iso

BASKET_PRODUCT_COLUMNS = "id,title,image,brand_id,price,sale_price,currency,in_stock"
ORDER_CURRENCY = "GBP"


def customer_name(profile: Dict[str, Any], email: Optional[str]) -> str:
    """Full name, else the email's local part, else a placeholder"""
    if profile.get("full_name"):
        return profile["full_name"]
    if email:
        return email.split("@")[0]
    return "Customer"


class BasketService:
    """A user's baskets, one per brand"""

    def __init__(self, client: Any):
        self.basket_repo = BasketRepository(client)
        self.item_repo = BasketItemRepository(client)
        self.product_repo = ProductRepository(client)
        self.brand_repo = BrandRepository(client)
        self.order_repo = OrderRepository(client)
        self.order_item_repo = OrderItemRepository(client)
        self.notification_repo = NotificationRepository(client)
        self.profile_repo = ProfileRepository(client)

    async def _owned_item(self, user_id: str, item_id: str) -> Dict[str, Any]:
        """A basket line, only if it sits in one of the user's baskets"""
        item = await self.item_repo.get(id=item_id)
        if item:
            basket = await self.basket_repo.get(id=item.get("basket_id"), columns="id,user_id")
            if basket and basket.get("user_id") == user_id:
                return item
        raise NotFoundError("Basket item not found")

    async def _items_with_products(self, baskets: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        items = await self.item_repo.in_baskets([basket["id"] for basket in baskets])
        products = await self.product_repo.get_many(
            list({item["product_id"] for item in items}), columns=BASKET_PRODUCT_COLUMNS
        )
        by_id = {product["id"]: product for product in products}
        return [{**item, "product": by_id.get(item.get("product_id"))} for item in items]

    async def get_baskets(self, user_id: str) -> Dict[str, Any]:
        """Baskets with their lines and running totals"""
        baskets = await self.basket_repo.for_user(user_id)
        items = await self._items_with_products(baskets)

        lines: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        for item in items:
            lines[item["basket_id"]].append(item)

        total_items = 0
        total_price = 0.0
        result = []
        for basket in baskets:
            basket_items = lines.get(basket["id"], [])
            for item in basket_items:
                quantity = item.get("quantity") or 0
                total_items += quantity
                if item["product"]:
                    total_price += effective_price(item["product"]) * quantity
            result.append({**basket, "basket_items": basket_items})

        return {"baskets": result, "total_items": total_items, "total_price": round(total_price, 2)}

    async def add_item(self, user_id: str, item_in: BasketItemCreate) -> Dict[str, Any]:
        product = await self.product_repo.get(id=item_in.product_id, columns="id,brand_id")
        if not product:
            raise NotFoundError("Product not found")

        brand_id = product.get("brand_id")
        basket = await self.basket_repo.find_for_brand(user_id, brand_id)
        if not basket:
            now = utc_now_iso()
            basket = await self.basket_repo.create(
                {"user_id": user_id, "brand_id": brand_id, "created_at": now, "updated_at": now}
            )

        line = await self.item_repo.find_line(basket["id"], product["id"], item_in.size, item_in.color)
        if line:
            quantity = (line.get("quantity") or 0) + item_in.quantity
            item = await self.item_repo.update(id=line["id"], obj_in={"quantity": quantity})
        else:
            item = await self.item_repo.create(
                {
                    "basket_id": basket["id"],
                    "product_id": product["id"],
                    "quantity": item_in.quantity,
                    "size": item_in.size,
                    "color": item_in.color,
                }
            )

        log.info("Added basket item", user_id=user_id, product_id=product["id"], quantity=item_in.quantity)
        return item

    async def update_quantity(self, user_id: str, item_id: str, quantity: int) -> Dict[str, Any]:
        await self._owned_item(user_id, item_id)
        return await self.item_repo.update(id=item_id, obj_in={"quantity": quantity})

    async def remove_item(self, user_id: str, item_id: str) -> None:
        await self._owned_item(user_id, item_id)
        await self.item_repo.delete(id=item_id)
        log.info("Removed basket item", user_id=user_id, item_id=item_id)

    async def clear_basket(self, user_id: str, basket_id: Optional[str]) -> None:
        if not basket_id:
            raise BadRequestError("Basket ID is required")
        basket = await self.basket_repo.get(id=basket_id, columns="id,user_id")
        if not basket:
            raise NotFoundError("Basket not found")
        if basket.get("user_id") != user_id:
            raise ForbiddenError("Access denied to this basket")

        await self.item_repo.delete_for_baskets([basket_id])
        await self.basket_repo.delete(id=basket_id)
        log.info("Cleared basket", user_id=user_id, basket_id=basket_id)

    async def _place_order(
        self,
        user_id: str,
        brand: Dict[str, Any],
        items: List[Dict[str, Any]],
        profile: Dict[str, Any],
        email: Optional[str],
    ) -> Dict[str, Any]:
        """Create the order for one brand, its lines and the owner notification"""
        total = round(sum(effective_price(item["product"]) * item["quantity"] for item in items), 2)
        order = await self.order_repo.create(
            {
                "user_id": user_id,
                "brand_id": brand["id"],
                "status": OrderStatus.PENDING.value,
                "total": total,
                "currency": ORDER_CURRENCY,
                "delivery_address": profile.get("address") or {},
                "customer_notes": "Order submitted from basket",
            }
        )
        await self.order_item_repo.create_many(
            [
                {
                    "order_id": order["id"],
                    "product_id": item["product_id"],
                    "quantity": item["quantity"],
                    "price": effective_price(item["product"]),
                    "size": item.get("size"),
                    "color": item.get("color"),
                }
                for item in items
            ]
        )

        notified = False
        if brand.get("user_id"):
            name = customer_name(profile, email)
            await self.notification_repo.create(
                {
                    "user_id": brand["user_id"],
                    "brand_id": brand["id"],
                    "type": "new_order",
                    "title": "New Order Received",
                    "message": f"You have received a new order for £{total:.2f} from {name}",
                    "is_read": False,
                    "data": {
                        "order_id": order["id"],
                        "brand_id": brand["id"],
                        "customer_name": name,
                        "total_amount": total,
                        "items_count": len(items),
                        "customer_email": email,
                        "customer_phone": profile.get("phone"),
                    },
                }
            )
            notified = True

        return {
            "order_id": order["id"],
            "brand_name": brand.get("name"),
            "total": total,
            "items_count": len(items),
            "notified": notified,
        }

    async def submit(self, user_id: str, email: Optional[str]) -> Dict[str, Any]:
        """
        Turn every basket line into one pending order per brand.

        A brand whose order fails is logged and skipped; the baskets are
        only emptied when at least one order was created.
        """
        baskets = await self.basket_repo.for_user(user_id)
        items = [item for item in await self._items_with_products(baskets) if item["product"]]
        if not items:
            raise BadRequestError("Basket is empty")

        profile = await self.profile_repo.get(id=user_id, columns="id,full_name,phone,address") or {}

        by_brand: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        for item in items:
            by_brand[item["product"]["brand_id"]].append(item)
        brands = {brand["id"]: brand for brand in await self.brand_repo.get_many(list(by_brand), columns="id,name,user_id")}

        orders = []
        for brand_id, brand_items in by_brand.items():
            brand = brands.get(brand_id)
            if not brand:
                log.warning("Skipping basket items of unknown brand", user_id=user_id, brand_id=brand_id)
                continue
            try:
                orders.append(await self._place_order(user_id, brand, brand_items, profile, email))
            except BaseAPIException as e:
                log.error("Failed to create order for brand", user_id=user_id, brand_id=brand_id, error=e.detail)

        if not orders:
            raise DatabaseError("No valid orders could be created")

        basket_ids = [basket["id"] for basket in baskets]
        await self.item_repo.delete_for_baskets(basket_ids)
        await self.basket_repo.delete_for_user(user_id)

        notifications_sent = sum(1 for order in orders if order.pop("notified"))
        log.info("Basket submitted", user_id=user_id, orders=len(orders), notifications=notifications_sent)
        return {
            "success": True,
            "message": "Basket submitted successfully",
            "orders": orders,
            "notifications_sent": notifications_sent,
        }
