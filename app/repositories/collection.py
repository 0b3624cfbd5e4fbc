"""
Collection (catalogue) repository
"""
from typing import List, Optional, Tuple

from app.repositories.base import BaseRepository, Row


class CollectionRepository(BaseRepository):
    """Repository for brand collections"""

    table = "collections"
    resource_name = "Collection"

    async def list_page(self, *, offset: int, end: int, brand_id: Optional[str] = None) -> Tuple[List[Row], int]:
        return await self.get_page(offset=offset, end=end, filters={"brand_id": brand_id})
