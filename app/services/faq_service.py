"""
FAQ management
"""

from typing import Any, Dict, List, Optional

from app.core.exceptions import NotFoundError
from app.core.logging import log
from app.core.permissions import require_super_admin
from app.models.profile import Profile
from app.repositories.faq import FaqRepository
from app.schemas.faq import FaqCreate, FaqUpdate
from app.utils.timestamps import utc_now_iso


class FaqService:
    def __init__(self, client: Any):
        self.faq_repo = FaqRepository(client)

    async def list_faqs(
        self,
        *,
        page_location: Optional[str] = None,
        category: Optional[str] = None,
        is_active: Optional[bool] = True,
        include_inactive: bool = False,
    ) -> List[Dict[str, Any]]:
        active = None if include_inactive else is_active
        return await self.faq_repo.search(page_location=page_location, category=category, is_active=active)

    async def create_faq(self, profile: Profile, faq_in: FaqCreate) -> Dict[str, Any]:
        require_super_admin(profile)
        now = utc_now_iso()
        faq = await self.faq_repo.create(
            faq_in.model_dump(), created_by=profile.id, updated_by=profile.id, created_at=now, updated_at=now
        )
        log.info("Created FAQ", faq_id=faq.get("id"), user_id=profile.id)
        return faq

    async def update_faq(self, profile: Profile, faq_update: FaqUpdate) -> Dict[str, Any]:
        require_super_admin(profile)
        updates = faq_update.model_dump(exclude={"id"}, exclude_none=True)
        updates.update(updated_by=profile.id, updated_at=utc_now_iso())

        faq = await self.faq_repo.update(id=faq_update.id, obj_in=updates)
        if not faq:
            raise NotFoundError("FAQ not found")
        return faq

    async def delete_faq(self, profile: Profile, faq_id: str) -> None:
        require_super_admin(profile)
        if not await self.faq_repo.get(id=faq_id, columns="id"):
            raise NotFoundError("FAQ not found")
        await self.faq_repo.delete(id=faq_id)
        log.info("Deleted FAQ", faq_id=faq_id, user_id=profile.id)
