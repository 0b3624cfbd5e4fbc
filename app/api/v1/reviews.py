"""
Review endpoints
"""
from typing import Any, Dict, List

from fastapi import APIRouter, BackgroundTasks, Query, status

from app.api.deps import ReviewServiceDep
from app.core.cache import invalidate_namespace
from app.schemas.review import ReviewCreate
from app.services.brand_service import BRAND_CACHE_NAMESPACE


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, summary="Submit a review")
async def create_review(
    review_in: ReviewCreate,
    review_service: ReviewServiceDep,
    background_tasks: BackgroundTasks,
) -> Dict[str, Any]:
    """Store a review; the brand's rating is recomputed from all its reviews"""
    review = await review_service.create_review(review_in)
    # Directory pages show ratings
    background_tasks.add_task(invalidate_namespace, BRAND_CACHE_NAMESPACE)
    return review


@router.get("", summary="Reviews of a brand")
async def list_reviews(
    review_service: ReviewServiceDep,
    brand_id: str = Query(..., min_length=1, description="Brand whose reviews to list"),
) -> List[Dict[str, Any]]:
    return await review_service.list_for_brand(brand_id)
