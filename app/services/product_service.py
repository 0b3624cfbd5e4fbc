"""
Product service: public catalogue and studio product management
"""

from typing import Any, Dict, List, Optional

from app.core.exceptions import NotFoundError
from app.core.logging import log
from app.core.pagination import paginate
from app.core.permissions import ensure_can_manage_brand, require_studio
from app.models.profile import Profile
from app.repositories.product import ProductRepository
from app.schemas.product import ProductCreate, ProductUpdate
from app.utils.timestamps import utc_now_iso


class ProductService:
    """Service layer for product operations"""

    def __init__(self, client: Any):
        self.product_repo = ProductRepository(client)

    async def list_products(
        self,
        *,
        page: int,
        limit: int,
        offset: int,
        end: int,
        brand_id: Optional[str] = None,
        category: Optional[str] = None,
        q: Optional[str] = None,
    ) -> Dict[str, Any]:
        products, total = await self.product_repo.search_page(
            offset=offset, end=end, brand_id=brand_id, category=category, q=q
        )
        return paginate(products, total, page, limit)

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        return await self.product_repo.get_or_404(id=product_id)

    async def list_studio_products(self, profile: Profile) -> List[Dict[str, Any]]:
        require_studio(profile)
        scope = profile.brand_scope()
        if scope == []:
            return []
        return await self.product_repo.scoped(scope)

    async def create_product(self, profile: Profile, product_in: ProductCreate) -> Dict[str, Any]:
        ensure_can_manage_brand(profile, product_in.brand_id)

        now = utc_now_iso()
        product = await self.product_repo.create(
            product_in.model_dump(mode="json"), created_by=profile.id, created_at=now, updated_at=now
        )
        log.info("Created product", product_id=product.get("id"), brand_id=product_in.brand_id, user_id=profile.id)
        return product

    async def _managed_product(self, profile: Profile, product_id: str) -> Dict[str, Any]:
        product = await self.product_repo.get(id=product_id, columns="id,brand_id")
        if not product:
            raise NotFoundError("Product not found")
        ensure_can_manage_brand(profile, product.get("brand_id"))
        return product

    async def update_product(self, profile: Profile, product_id: str, product_update: ProductUpdate) -> Dict[str, Any]:
        await self._managed_product(profile, product_id)

        updates = product_update.model_dump(exclude_unset=True)
        updates["updated_at"] = utc_now_iso()

        product = await self.product_repo.update(id=product_id, obj_in=updates)
        if not product:
            raise NotFoundError("Product not found")
        return product

    async def delete_product(self, profile: Profile, product_id: str) -> None:
        await self._managed_product(profile, product_id)
        await self.product_repo.delete(id=product_id)
        log.info("Deleted product", product_id=product_id, user_id=profile.id)
