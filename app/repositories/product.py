"""
Product repository
"""
from typing import List, Optional, Tuple

from app.core.permissions import scope_filters
from app.repositories.base import BaseRepository, Row

# Portfolio pieces are showcased on brand pages but not sold
PUBLIC_SERVICE_FILTER = "service_type.is.null,service_type.neq.portfolio"


class ProductRepository(BaseRepository):
    """Repository for products"""

    table = "products"
    resource_name = "Product"

    async def search_page(
        self,
        *,
        offset: int,
        end: int,
        brand_id: Optional[str] = None,
        category: Optional[str] = None,
        q: Optional[str] = None,
    ) -> Tuple[List[Row], int]:
        return await self.get_page(
            offset=offset,
            end=end,
            filters={"brand_id": brand_id, "category": category},
            search=(("title", "description"), q) if q else None,
        )

    async def public_for_brand(self, brand_id: str) -> List[Row]:
        """In-stock, non-portfolio products of a brand, newest first"""
        query = (
            self.query()
            .eq("brand_id", brand_id)
            .eq("in_stock", True)
            .or_(PUBLIC_SERVICE_FILTER)
            .order("created_at", desc=True)
        )
        response = await self.execute(query, "listing")
        return response.data or []

    async def in_stock(
        self,
        *,
        collection_id: Optional[str] = None,
        brand_ids: Optional[List[str]] = None,
        limit: int = 8,
    ) -> List[Row]:
        """In-stock products of a collection and/or a set of brands"""
        filters = {"in_stock": True, "collection_id": collection_id, "brand_id": brand_ids}
        return await self.get_multi(filters=filters, limit=limit)

    async def scoped(self, scope: Optional[List[str]]) -> List[Row]:
        """Products visible under a brand scope, newest first"""
        return await self.get_multi(filters=scope_filters(scope), order_by="created_at", order_desc=True)
