"""
Brand service with business logic
"""

from typing import Any, Dict, List, Optional

from app.core.cache import cache_key, cached
from app.core.exceptions import BadRequestError, BaseAPIException, ConflictError, NotFoundError
from app.core.logging import log
from app.core.pagination import paginate
from app.core.permissions import ensure_can_manage_brand, require_admin
from app.models.profile import Profile
from app.repositories.brand import BrandRepository
from app.repositories.product import ProductRepository
from app.repositories.profile import ProfileRepository
from app.repositories.review import ReviewRepository
from app.schemas.brand import BrandCreate, BrandUpdate
from app.utils.normalization import slugify
from app.utils.pricing import calculate_pricing_stats
from app.utils.timestamps import utc_now_iso

BRAND_CACHE_NAMESPACE = "brands"


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves up, 4.25 -> 4.3"""
    factor = 10 ** digits
    return int(value * factor + 0.5) / factor


def _directory_key(self, **filters) -> str:
    return cache_key("directory", **filters)


class BrandService:
    """Service layer for brand operations"""

    def __init__(self, client: Any):
        self.brand_repo = BrandRepository(client)
        self.product_repo = ProductRepository(client)
        self.profile_repo = ProfileRepository(client)
        self.review_repo = ReviewRepository(client)

    @cached(namespace=BRAND_CACHE_NAMESPACE, key_builder=_directory_key)
    async def list_brands(
        self,
        *,
        page: int,
        limit: int,
        offset: int,
        end: int,
        category: Optional[str] = None,
        location: Optional[str] = None,
        q: Optional[str] = None,
        verified: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Directory page with filters"""
        brands, total = await self.brand_repo.search_page(
            offset=offset, end=end, category=category, location=location, q=q, verified=verified
        )
        return paginate(brands, total, page, limit)

    async def get_brand(self, brand_id: str) -> Dict[str, Any]:
        return await self.brand_repo.get_or_404(id=brand_id)

    async def get_brand_products(self, brand_id: str) -> Dict[str, Any]:
        """Public products of a brand with their pricing summary"""
        products = await self.product_repo.public_for_brand(brand_id)
        return {"products": products, "pricing_stats": calculate_pricing_stats(products)}

    async def list_studio_brands(self, profile: Profile) -> List[Dict[str, Any]]:
        """Brands the caller may manage"""
        scope = profile.brand_scope()
        if scope is None:
            return await self.brand_repo.get_multi(order_by="name")
        return await self.brand_repo.get_many(scope)

    async def create_brand(self, profile: Profile, brand_in: BrandCreate) -> Dict[str, Any]:
        """Create a brand whose id is the slug of its name"""
        require_admin(profile)

        brand_id = slugify(brand_in.name)
        if not brand_id:
            raise BadRequestError("Brand name must contain letters or digits")

        now = utc_now_iso()
        data = brand_in.model_dump()
        data.update(
            id=brand_id,
            long_description=brand_in.long_description or brand_in.description,
            price_range=brand_in.price_range or "$",
            rating=0,
            created_at=now,
            updated_at=now,
        )

        try:
            brand = await self.brand_repo.create(data)
        except ConflictError:
            raise ConflictError("A brand with this name already exists. Please choose a different name.", brand_id=brand_id)

        log.info("Created brand", brand_id=brand_id, name=brand_in.name, user_id=profile.id)
        return brand

    async def update_brand(self, profile: Profile, brand_id: str, brand_update: BrandUpdate) -> Dict[str, Any]:
        ensure_can_manage_brand(profile, brand_id)

        updates = brand_update.model_dump(exclude_unset=True)
        updates["updated_at"] = utc_now_iso()

        brand = await self.brand_repo.update(id=brand_id, obj_in=updates)
        if not brand:
            raise NotFoundError("Brand not found")
        return brand

    async def delete_brand(self, profile: Profile, brand_id: str) -> Dict[str, Any]:
        """
        Delete a brand.

        Brand owners also lose the id from their owned brands; failing to
        update the profile doesn't undo the deletion.
        """
        ensure_can_manage_brand(profile, brand_id)

        brand = await self.brand_repo.get(id=brand_id, columns="id,name")
        if not brand:
            raise NotFoundError("Brand not found")

        await self.brand_repo.delete(id=brand_id)
        log.info("Deleted brand", brand_id=brand_id, user_id=profile.id)

        if profile.is_brand_admin and profile.owns_brand(brand_id):
            remaining = [owned for owned in profile.owned_brands if owned != brand_id]
            try:
                await self.profile_repo.set_owned_brands(profile.id, remaining)
            except BaseAPIException as e:
                log.warning("Could not update owned brands after delete", user_id=profile.id, error=e.detail)

        return brand

    async def recompute_rating(self, brand_id: str) -> Optional[float]:
        """Set the brand rating to the mean review rating, one decimal"""
        ratings = await self.review_repo.ratings_for_brand(brand_id)
        if not ratings:
            log.info("No reviews for brand, skipping rating update", brand_id=brand_id)
            return None

        rating = round_half_up(sum(ratings) / len(ratings), 1)
        await self.brand_repo.update_rating(brand_id, rating)
        log.info("Updated brand rating", brand_id=brand_id, rating=rating, reviews=len(ratings))
        return rating
