"""
Legal document repository
"""
from typing import List, Optional

from app.repositories.base import BaseRepository, Row


class LegalDocumentRepository(BaseRepository):
    """Versioned terms of service and privacy policy"""

    table = "legal_documents"
    resource_name = "Legal document"

    async def search(self, document_type: Optional[str] = None, active_only: bool = True) -> List[Row]:
        filters = {"document_type": document_type, "is_active": True if active_only else None}
        return await self.get_multi(filters=filters, order_by="created_at", order_desc=True)

    async def latest_version(self, document_type: str) -> int:
        rows = await self.get_multi(
            filters={"document_type": document_type}, columns="version", order_by="version", order_desc=True, limit=1
        )
        return (rows[0].get("version") or 0) if rows else 0
