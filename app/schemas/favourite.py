"""
Favourite API schemas
"""
from pydantic import Field

from app.models.enums import FavouriteItemType
from app.schemas.common import RequestModel


class FavouriteCreate(RequestModel):
    item_id: str = Field(..., min_length=1)
    item_type: FavouriteItemType
