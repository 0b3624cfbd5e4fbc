"""
User profile model
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class UserRole(str, Enum):
    """Roles stored in profiles.role"""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    BRAND_ADMIN = "brand_admin"
    USER = "user"


ADMIN_ROLES = {UserRole.SUPER_ADMIN.value, UserRole.ADMIN.value}
STUDIO_ROLES = ADMIN_ROLES | {UserRole.BRAND_ADMIN.value}


class Profile(BaseModel):
    """A row of the profiles table, reduced to what access checks need"""

    id: str
    email: Optional[str] = None
    role: str = UserRole.USER.value
    owned_brands: List[str] = []

    model_config = ConfigDict(extra="ignore")

    @field_validator("owned_brands", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or []

    @field_validator("role", mode="before")
    @classmethod
    def _default_role(cls, value):
        return value or UserRole.USER.value

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN.value

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    @property
    def is_brand_admin(self) -> bool:
        return self.role == UserRole.BRAND_ADMIN.value

    @property
    def is_studio_member(self) -> bool:
        return self.role in STUDIO_ROLES

    def brand_scope(self) -> Optional[List[str]]:
        """
        Brand ids this profile may see.

        None means every brand; an empty list means none.
        """
        if self.is_admin:
            return None
        if self.is_brand_admin:
            return list(self.owned_brands)
        return []

    def owns_brand(self, brand_id: Optional[str]) -> bool:
        return bool(brand_id) and brand_id in self.owned_brands

    def can_manage_brand(self, brand_id: Optional[str]) -> bool:
        return self.is_admin or (self.is_brand_admin and self.owns_brand(brand_id))
