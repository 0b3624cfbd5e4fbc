"""
Role and brand-ownership checks.

The service talks to Supabase with the service-role key, so every query that
touches brand-owned rows is narrowed here first.
"""

from typing import Any, Dict, List, Optional

from app.core.exceptions import ForbiddenError
from app.models.profile import Profile


def require_studio(profile: Profile) -> Profile:
    """Studio pages are open to admins and brand owners"""
    if not profile.is_studio_member:
        raise ForbiddenError("Studio access required")
    return profile


def require_admin(profile: Profile) -> Profile:
    if not profile.is_admin:
        raise ForbiddenError("Admin access required")
    return profile


def require_super_admin(profile: Profile) -> Profile:
    if not profile.is_super_admin:
        raise ForbiddenError("Super admin access required")
    return profile


def ensure_can_manage_brand(profile: Profile, brand_id: Optional[str]) -> None:
    if not profile.can_manage_brand(brand_id):
        raise ForbiddenError("You don't have permission to manage this brand", brand_id=brand_id)


def in_scope(scope: Optional[List[str]], brand_id: Optional[str]) -> bool:
    """Whether a row belonging to brand_id is visible under scope"""
    if scope is None:
        return True
    return brand_id in scope


def scope_filters(scope: Optional[List[str]], column: str = "brand_id") -> Dict[str, Any]:
    """
    Repository filters for a brand scope.

    An unrestricted scope adds nothing; a list becomes an ``in`` filter,
    and an empty list matches no rows at all.
    """
    if scope is None:
        return {}
    return {column: list(scope)}
