"""
Basket repositories
"""
from typing import List, Optional

from app.repositories.base import BaseRepository, Row


class BasketRepository(BaseRepository):
    """One basket per user and brand"""

    table = "baskets"
    resource_name = "Basket"

    async def for_user(self, user_id: str) -> List[Row]:
        return await self.get_multi(filters={"user_id": user_id}, order_by="created_at", order_desc=True)

    async def find_for_brand(self, user_id: str, brand_id: str) -> Optional[Row]:
        return await self.find_one({"user_id": user_id, "brand_id": brand_id})

    async def delete_for_user(self, user_id: str) -> int:
        return await self.delete_where({"user_id": user_id})


class BasketItemRepository(BaseRepository):
    """Repository for basket lines"""

    table = "basket_items"
    resource_name = "Basket item"

    async def in_baskets(self, basket_ids: List[str]) -> List[Row]:
        if not basket_ids:
            return []
        return await self.get_multi(filters={"basket_id": basket_ids}, order_by="created_at")

    async def find_line(self, basket_id: str, product_id: str, size: Optional[str], color: Optional[str]) -> Optional[Row]:
        """The line for this product variant; a missing size or colour only matches a missing one"""
        query = self.apply_filters(self.query(), {"basket_id": basket_id, "product_id": product_id})
        query = query.eq("size", size) if size else query.is_("size", "null")
        query = query.eq("color", color) if color else query.is_("color", "null")
        response = await self.execute(query.limit(1), "fetching")
        return response.data[0] if response.data else None

    async def delete_for_baskets(self, basket_ids: List[str]) -> int:
        if not basket_ids:
            return 0
        return await self.delete_where({"basket_id": basket_ids})
