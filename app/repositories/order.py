"""
Order repositories: basket orders, their lines and tailored orders
"""
from typing import List, Optional, Tuple

from app.core.permissions import scope_filters
from app.repositories.base import BaseRepository, Row


class ScopedOrderMixin:
    """Studio listings limited to a brand scope"""

    async def scoped_page(
        self, *, offset: int, end: int, scope: Optional[List[str]], status: Optional[str] = None
    ) -> Tuple[List[Row], int]:
        return await self.get_page(offset=offset, end=end, filters={"status": status, **scope_filters(scope)})

    async def get_scoped(self, order_id: str, scope: Optional[List[str]]) -> Optional[Row]:
        return await self.find_one({"id": order_id, **scope_filters(scope)})


class OrderRepository(ScopedOrderMixin, BaseRepository):
    """Orders created from baskets, one per brand"""

    table = "orders"
    resource_name = "Order"

    async def for_user(self, user_id: str) -> List[Row]:
        return await self.get_multi(filters={"user_id": user_id}, order_by="created_at", order_desc=True)


class OrderItemRepository(BaseRepository):
    table = "order_items"
    resource_name = "Order item"

    async def for_orders(self, order_ids: List[str]) -> List[Row]:
        if not order_ids:
            return []
        return await self.get_multi(filters={"order_id": order_ids}, order_by="created_at")


class TailoredOrderRepository(ScopedOrderMixin, BaseRepository):
    """Made-to-measure orders"""

    table = "tailored_orders"
    resource_name = "Custom order"

    async def for_user(self, user_id: str) -> List[Row]:
        return await self.get_multi(filters={"user_id": user_id}, order_by="created_at", order_desc=True)
