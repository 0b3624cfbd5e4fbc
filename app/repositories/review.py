"""
Review repositories
"""
from typing import List, Optional, Tuple

from app.repositories.base import BaseRepository, Row


class ReviewRepository(BaseRepository):
    """Repository for brand reviews"""

    table = "reviews"
    resource_name = "Review"

    async def for_brand(self, brand_id: str) -> List[Row]:
        return await self.get_multi(filters={"brand_id": brand_id}, order_by="created_at", order_desc=True)

    async def ratings_for_brand(self, brand_id: str) -> List[float]:
        rows = await self.get_multi(filters={"brand_id": brand_id}, columns="rating")
        return [row["rating"] for row in rows if row.get("rating") is not None]


class ReviewDetailsRepository(BaseRepository):
    """Read-only view joining reviews with brand and reply details"""

    table = "reviews_with_details"
    resource_name = "Review"

    async def list_page(
        self, *, offset: int, end: int, brand_ids: Optional[List[str]] = None
    ) -> Tuple[List[Row], int]:
        return await self.get_page(offset=offset, end=end, filters={"brand_id": brand_ids})


class ReviewReplyRepository(BaseRepository):
    """Brand replies shown under reviews"""

    table = "review_replies"
    resource_name = "Reply"

    async def for_review(self, review_id: str) -> List[Row]:
        return await self.get_multi(filters={"review_id": review_id}, order_by="created_at")
