"""
Favourite service
"""

from typing import Any, Dict, List, Optional

from app.core.exceptions import BadRequestError
from app.core.logging import log
from app.models.enums import FavouriteItemType
from app.repositories.brand import BrandRepository
from app.repositories.collection import CollectionRepository
from app.repositories.favourite import FavouriteRepository
from app.repositories.product import ProductRepository
from app.utils.pricing import effective_price

BRAND_CARD_COLUMNS = "id,name,image,category,location,is_verified,rating"
CATALOGUE_CARD_COLUMNS = "id,title,image,brand_id,description"
PRODUCT_CARD_COLUMNS = "id,title,image,brand_id,price,sale_price,category"
PRODUCT_BRAND_COLUMNS = "id,name,location,price_range,currency"


class FavouriteService:
    """A user's saved brands, catalogues and products"""

    def __init__(self, client: Any):
        self.favourite_repo = FavouriteRepository(client)
        self.brand_repo = BrandRepository(client)
        self.collection_repo = CollectionRepository(client)
        self.product_repo = ProductRepository(client)

    async def _item_card(self, favourite: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        item_type = favourite.get("item_type")
        item_id = favourite.get("item_id")

        if item_type == FavouriteItemType.BRAND.value:
            item = await self.brand_repo.get(id=item_id, columns=BRAND_CARD_COLUMNS)
        elif item_type == FavouriteItemType.CATALOGUE.value:
            item = await self.collection_repo.get(id=item_id, columns=CATALOGUE_CARD_COLUMNS)
        elif item_type == FavouriteItemType.PRODUCT.value:
            item = await self.product_repo.get(id=item_id, columns=PRODUCT_CARD_COLUMNS)
            if item:
                brand = await self.brand_repo.get(id=item.get("brand_id"), columns=PRODUCT_BRAND_COLUMNS)
                item = {**item, "price": effective_price(item), "brand": brand}
        else:
            log.warning("Unknown favourite type", favourite_id=favourite.get("id"), item_type=item_type)
            return None

        if not item:
            return None
        return {**item, "item_type": item_type, "favourite_id": favourite.get("id")}

    async def list_favourites(self, user_id: str) -> List[Dict[str, Any]]:
        """Favourites with the current data of each item; deleted items are skipped"""
        favourites = await self.favourite_repo.for_user(user_id)
        cards = []
        for favourite in favourites:
            card = await self._item_card(favourite)
            if card:
                cards.append(card)
        return cards

    async def add_favourite(self, user_id: str, item_id: str, item_type: str) -> Dict[str, Any]:
        if await self.favourite_repo.find(user_id, item_id, item_type):
            raise BadRequestError("Item already in favourites")

        favourite = await self.favourite_repo.create({"user_id": user_id, "item_id": item_id, "item_type": item_type})
        log.info("Added favourite", user_id=user_id, item_id=item_id, item_type=item_type)
        return favourite

    async def remove_favourite(self, user_id: str, item_id: str, item_type: str) -> int:
        removed = await self.favourite_repo.remove(user_id, item_id, item_type)
        log.info("Removed favourite", user_id=user_id, item_id=item_id, item_type=item_type, removed=removed)
        return removed
