"""
Favourite repository
"""
from typing import List, Optional

from app.repositories.base import BaseRepository, Row


class FavouriteRepository(BaseRepository):
    """Repository for user favourites"""

    table = "favourites"
    resource_name = "Favourite"

    async def for_user(self, user_id: str, item_type: Optional[str] = None) -> List[Row]:
        return await self.get_multi(filters={"user_id": user_id, "item_type": item_type})

    async def find(self, user_id: str, item_id: str, item_type: str) -> Optional[Row]:
        return await self.find_one({"user_id": user_id, "item_id": item_id, "item_type": item_type})

    async def remove(self, user_id: str, item_id: str, item_type: str) -> int:
        return await self.delete_where({"user_id": user_id, "item_id": item_id, "item_type": item_type})
