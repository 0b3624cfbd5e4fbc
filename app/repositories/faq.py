"""
FAQ repository
"""
from typing import List, Optional

from app.repositories.base import BaseRepository, Row


class FaqRepository(BaseRepository):
    table = "faqs"
    resource_name = "FAQ"

    async def search(
        self,
        *,
        page_location: Optional[str] = None,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> List[Row]:
        """FAQs by display order; a page location also matches FAQs shown everywhere"""
        query = self.query()
        if page_location and page_location != "all":
            query = query.in_("page_location", [page_location, "all"])
        query = self.apply_filters(query, {"category": category, "is_active": is_active})
        query = query.order("display_order").order("created_at", desc=True)

        response = await self.execute(query, "listing")
        return response.data or []
