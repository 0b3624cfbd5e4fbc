"""
Inbox repositories: inquiries, their replies, and notifications
"""
from typing import Any, Dict, List, Optional

from app.core.permissions import scope_filters
from app.repositories.base import BaseRepository, Row


class InquiryRepository(BaseRepository):
    """Repository for customer inquiries"""

    table = "inquiries"
    resource_name = "Inquiry"

    async def scoped(self, scope: Optional[List[str]]) -> List[Row]:
        return await self.get_multi(filters=scope_filters(scope), order_by="created_at", order_desc=True)

    async def get_scoped(self, inquiry_id: str, scope: Optional[List[str]]) -> Optional[Row]:
        """An inquiry, only if its brand is inside scope"""
        return await self.find_one({"id": inquiry_id, **scope_filters(scope)})

    async def count_since(self, scope: Optional[List[str]], since: str) -> int:
        return await self.count(scope_filters(scope), refine=lambda query: query.gte("created_at", since))

    async def breakdown_rows(self, scope: Optional[List[str]]) -> List[Row]:
        return await self.get_multi(filters=scope_filters(scope), columns="inquiry_type,priority,status")

    async def inbox_stats(self, admin_user_id: str) -> Row:
        """Headline counters computed by the get_inbox_stats function"""
        query = self.client.rpc("get_inbox_stats", {"admin_user_id": admin_user_id})
        response = await self.execute(query, "aggregating")
        data = response.data
        if isinstance(data, list):
            return data[0] if data else {}
        return data or {}


class InquiryReplyRepository(BaseRepository):
    """Repository for replies on inquiries"""

    table = "inquiry_replies"
    resource_name = "Reply"

    async def for_inquiry(self, inquiry_id: str) -> List[Row]:
        return await self.get_multi(filters={"inquiry_id": inquiry_id}, order_by="created_at")

    async def delete_for_inquiry(self, inquiry_id: str) -> int:
        return await self.delete_where({"inquiry_id": inquiry_id})


class NotificationRepository(BaseRepository):
    """Repository for studio notifications"""

    table = "notifications"
    resource_name = "Notification"

    async def for_user(self, user_id: str, scope: Optional[List[str]]) -> List[Row]:
        filters: Dict[str, Any] = {"user_id": user_id}
        if scope:
            filters["brand_id"] = scope
        return await self.get_multi(filters=filters, order_by="created_at", order_desc=True)
