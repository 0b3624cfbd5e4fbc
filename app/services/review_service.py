"""
Review service
"""

from typing import Any, Dict, List

from app.core.exceptions import BaseAPIException
from app.core.logging import log
from app.repositories.review import ReviewRepository
from app.schemas.review import ReviewCreate
from app.services.brand_service import BrandService
from app.utils.timestamps import utc_now


class ReviewService:
    """Customer reviews and the brand rating they drive"""

    def __init__(self, client: Any):
        self.review_repo = ReviewRepository(client)
        self.brand_service = BrandService(client)

    async def list_for_brand(self, brand_id: str) -> List[Dict[str, Any]]:
        return await self.review_repo.for_brand(brand_id)

    async def create_review(self, review_in: ReviewCreate) -> Dict[str, Any]:
        """Store a review and refresh the brand's average rating"""
        review = await self.review_repo.create(
            {
                "brand_id": review_in.brand_id,
                "author": review_in.author,
                "comment": review_in.comment,
                "rating": review_in.rating,
                "date": (review_in.review_date or utc_now().date()).isoformat(),
                "user_id": review_in.user_id,
            }
        )

        try:
            await self.brand_service.recompute_rating(review_in.brand_id)
        except BaseAPIException as e:
            log.error("Failed to update brand rating", brand_id=review_in.brand_id, error=e.detail)

        return review
