"""
Brand repository
"""
from typing import Any, Dict, List, Optional, Tuple

from app.repositories.base import BaseRepository, Row


class BrandRepository(BaseRepository):
    """Repository for the brands directory"""

    table = "brands"
    resource_name = "Brand"

    async def search_page(
        self,
        *,
        offset: int,
        end: int,
        category: Optional[str] = None,
        location: Optional[str] = None,
        q: Optional[str] = None,
        verified: Optional[bool] = None,
    ) -> Tuple[List[Row], int]:
        """Directory page; ``location`` matches partially"""
        filters: Dict[str, Any] = {"category": category, "is_verified": verified}

        def refine(query):
            if location:
                query = query.ilike("location", f"%{location}%")
            return query

        return await self.get_page(
            offset=offset,
            end=end,
            filters=filters,
            search=(("name", "description"), q) if q else None,
            order_by="name",
            order_desc=False,
            refine=refine,
        )

    async def list_ids(self) -> List[str]:
        rows = await self.get_multi(columns="id")
        return [row["id"] for row in rows]

    async def update_rating(self, brand_id: str, rating: float) -> Optional[Row]:
        return await self.update(id=brand_id, obj_in={"rating": rating})
