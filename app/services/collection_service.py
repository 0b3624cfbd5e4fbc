"""
Collection service: catalogues and product recommendations
"""

import random
from typing import Any, Dict, List, Optional

from app.core.logging import log
from app.core.pagination import paginate
from app.models.enums import FavouriteItemType
from app.repositories.collection import CollectionRepository
from app.repositories.favourite import FavouriteRepository
from app.repositories.product import ProductRepository

RECOMMENDATION_POOL = 8
RECOMMENDATION_COUNT = 4
FAVOURITE_BRAND_PICKS = 2


class CollectionService:
    """Service layer for collections"""

    def __init__(self, client: Any, rng: Optional[random.Random] = None):
        self.collection_repo = CollectionRepository(client)
        self.product_repo = ProductRepository(client)
        self.favourite_repo = FavouriteRepository(client)
        self.rng = rng or random.Random()

    async def list_collections(
        self, *, page: int, limit: int, offset: int, end: int, brand_id: Optional[str] = None
    ) -> Dict[str, Any]:
        collections, total = await self.collection_repo.list_page(offset=offset, end=end, brand_id=brand_id)
        return paginate(collections, total, page, limit)

    async def get_collection(self, collection_id: str) -> Dict[str, Any]:
        collection = await self.collection_repo.get_or_404(id=collection_id)
        products = await self.product_repo.get_multi(
            filters={"collection_id": collection_id}, order_by="created_at", order_desc=True
        )
        return {**collection, "products": products}

    def _shuffled(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        rows = list(rows)
        self.rng.shuffle(rows)
        return rows

    async def recommendations(self, collection_id: str, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Products to show next to a collection.

        Signed-in users with favourite brands get up to two picks from those
        brands, the rest is filled from the collection itself.
        """
        await self.collection_repo.get_or_404(id=collection_id, columns="id")

        picks: List[Dict[str, Any]] = []
        if user_id:
            favourites = await self.favourite_repo.for_user(user_id, FavouriteItemType.BRAND.value)
            brand_ids = [favourite["item_id"] for favourite in favourites]
            if brand_ids:
                candidates = await self.product_repo.in_stock(brand_ids=brand_ids, limit=RECOMMENDATION_POOL)
                picks = self._shuffled(candidates)[:FAVOURITE_BRAND_PICKS]

        chosen = {product["id"] for product in picks}
        pool = await self.product_repo.in_stock(collection_id=collection_id, limit=RECOMMENDATION_POOL)
        for product in self._shuffled(pool):
            if len(picks) >= RECOMMENDATION_COUNT:
                break
            if product["id"] not in chosen:
                picks.append(product)
                chosen.add(product["id"])

        log.debug("Built recommendations", collection_id=collection_id, count=len(picks), personalised=bool(user_id))
        return picks
