"""
Lead repositories
"""
from typing import Any, Dict, List, Optional, Tuple

from app.core.permissions import scope_filters
from app.repositories.base import BaseRepository, Row

LEAD_SEARCH_COLUMNS = ("customer_name", "customer_email", "notes")
ANALYTICS_COLUMNS = "id,status,created_at,estimated_value,brand_id"


class LeadRepository(BaseRepository):
    """Repository for sales leads"""

    table = "leads"
    resource_name = "Lead"

    async def list_page(
        self,
        *,
        offset: int,
        end: int,
        scope: Optional[List[str]],
        filters: Dict[str, Any],
        search: Optional[str] = None,
    ) -> Tuple[List[Row], int]:
        return await self.get_page(
            offset=offset,
            end=end,
            filters={**filters, **scope_filters(scope)},
            search=(LEAD_SEARCH_COLUMNS, search) if search else None,
        )

    async def for_analytics(self, scope: Optional[List[str]]) -> List[Row]:
        return await self.get_multi(filters=scope_filters(scope), columns=ANALYTICS_COLUMNS)

    async def converted(self, scope: Optional[List[str]]) -> List[Row]:
        filters = {"status": "converted", **scope_filters(scope)}
        return await self.get_multi(filters=filters, columns=ANALYTICS_COLUMNS)

    async def get_scoped(self, lead_id: str, scope: Optional[List[str]]) -> Optional[Row]:
        return await self.find_one({"id": lead_id, **scope_filters(scope)}, columns="id,brand_id,customer_name")


class LeadInteractionRepository(BaseRepository):
    """Repository for the lead activity log"""

    table = "lead_interactions"
    resource_name = "Lead interaction"

    async def delete_for_lead(self, lead_id: str) -> int:
        return await self.delete_where({"lead_id": lead_id})
