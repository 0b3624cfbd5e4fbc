"""
Profile repository
"""
from typing import List, Optional

from app.models.profile import Profile, UserRole
from app.repositories.base import BaseRepository, Row


class ProfileRepository(BaseRepository):
    """Repository for user profiles (roles and brand ownership)"""

    table = "profiles"
    resource_name = "Profile"

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        row = await self.get(id=user_id, columns="id,email,role,owned_brands")
        return Profile.model_validate(row) if row else None

    async def get_by_email(self, email: str) -> Optional[Row]:
        return await self.find_one({"email": email})

    async def list_all(self) -> List[Row]:
        return await self.get_multi(order_by="created_at", order_desc=True)

    async def super_admins(self) -> List[Row]:
        return await self.get_multi(filters={"role": UserRole.SUPER_ADMIN.value}, columns="id,email,owned_brands")

    async def set_owned_brands(self, user_id: str, owned_brands: List[str], **extra) -> Optional[Row]:
        return await self.update(id=user_id, obj_in={"owned_brands": owned_brands, **extra})
