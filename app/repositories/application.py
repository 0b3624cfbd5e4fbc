"""
Designer application repository
"""
from typing import List

from app.repositories.base import BaseRepository, Row


class ApplicationRepository(BaseRepository):
    table = "designer_applications"
    resource_name = "Application"

    async def list_all(self) -> List[Row]:
        return await self.get_multi()
