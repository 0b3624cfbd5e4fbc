"""
Super-admin and moderation operations
"""

import asyncio
from typing import Any, Dict, List, Optional

from app.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.core.logging import log
from app.core.pagination import paginate
from app.core.permissions import in_scope, require_studio, require_super_admin
from app.models.profile import Profile
from app.repositories.brand import BrandRepository
from app.repositories.profile import ProfileRepository
from app.repositories.review import ReviewDetailsRepository, ReviewRepository
from app.schemas.admin import UserUpsert
from app.services.image_repair_service import ImageRepairService
from app.utils.normalization import normalize_email
from app.utils.timestamps import utc_now_iso


def merge_brand_ids(owned: List[str], brand_ids: List[str]) -> List[str]:
    """Owned brands followed by the missing ones, order kept, no duplicates"""
    merged = list(dict.fromkeys(owned))
    seen = set(merged)
    for brand_id in brand_ids:
        if brand_id not in seen:
            merged.append(brand_id)
            seen.add(brand_id)
    return merged


class AdminService:
    """Review moderation, user roles and maintenance jobs"""

    def __init__(self, client: Any):
        self.client = client
        self.review_repo = ReviewRepository(client)
        self.review_details_repo = ReviewDetailsRepository(client)
        self.profile_repo = ProfileRepository(client)
        self.brand_repo = BrandRepository(client)

    async def list_reviews(
        self,
        profile: Profile,
        *,
        page: int,
        limit: int,
        offset: int,
        end: int,
        brand_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        require_studio(profile)
        scope = profile.brand_scope()

        if brand_id:
            if not in_scope(scope, brand_id):
                raise ForbiddenError("Access denied to this brand")
            brand_ids: Optional[List[str]] = [brand_id]
        else:
            brand_ids = scope

        if brand_ids == []:
            return paginate([], 0, page, limit)

        reviews, total = await self.review_details_repo.list_page(offset=offset, end=end, brand_ids=brand_ids)
        return paginate(reviews, total, page, limit)

    async def delete_review(self, profile: Profile, review_id: str) -> None:
        require_studio(profile)
        review = await self.review_repo.get(id=review_id, columns="id,brand_id")
        if not review:
            raise NotFoundError("Review not found")
        if not in_scope(profile.brand_scope(), review.get("brand_id")):
            raise ForbiddenError("Access denied to this review")

        await self.review_repo.delete(id=review_id)
        log.info("Deleted review", review_id=review_id, brand_id=review.get("brand_id"), user_id=profile.id)

    async def list_users(self, profile: Profile) -> List[Dict[str, Any]]:
        require_super_admin(profile)
        return await self.profile_repo.list_all()

    async def upsert_user(self, profile: Profile, user_in: UserUpsert) -> Dict[str, Any]:
        """Set role and owned brands on the profile with this email, creating it if needed"""
        require_super_admin(profile)
        email = normalize_email(user_in.email)
        now = utc_now_iso()
        fields = {"role": user_in.role.value, "owned_brands": user_in.owned_brands, "updated_at": now}

        existing = await self.profile_repo.get_by_email(email)
        if existing:
            user = await self.profile_repo.update(id=existing["id"], obj_in=fields)
            action = "updated"
        else:
            user = await self.profile_repo.create({"email": email, "created_at": now, **fields})
            action = "created"

        log.info("User role saved", email=email, role=user_in.role.value, action=action, user_id=profile.id)
        return {"user": user, "action": action}

    async def delete_user(self, profile: Profile, user_id: str) -> None:
        require_super_admin(profile)
        if user_id == profile.id:
            raise BadRequestError("You cannot delete your own profile")
        if not await self.profile_repo.get(id=user_id, columns="id"):
            raise NotFoundError("User not found")
        await self.profile_repo.delete(id=user_id)
        log.info("Deleted user profile", deleted_user_id=user_id, user_id=profile.id)

    async def sync_super_admin_brands(self) -> Dict[str, Any]:
        """
        Give every super admin ownership of every brand.

        Admins already owning every brand are left untouched. The other
        updates run concurrently and independently; a failed update is
        reported in the summary and nothing is rolled back.
        """
        admins = await self.profile_repo.super_admins()
        brand_ids = await self.brand_repo.list_ids()

        planned = []
        for admin in admins:
            owned = admin.get("owned_brands") or []
            merged = merge_brand_ids(owned, brand_ids)
            planned.append((admin, merged, len(merged) - len(set(owned))))

        pending = [(admin, merged) for admin, merged, added in planned if added]
        outcomes = await asyncio.gather(
            *(self.profile_repo.set_owned_brands(admin["id"], merged, updated_at=utc_now_iso()) for admin, merged in pending),
            return_exceptions=True,
        )
        failures = {admin["id"]: outcome for (admin, _), outcome in zip(pending, outcomes) if isinstance(outcome, Exception)}

        details = []
        for admin, merged, added in planned:
            entry = {"user_id": admin["id"], "email": admin.get("email"), "brands_added": 0}
            error = failures.get(admin["id"])
            if error is not None:
                log.error("Super admin brand sync failed", user_id=admin["id"], error=str(error))
                entry.update(success=False, error=str(error))
            else:
                entry.update(success=True, brands_added=added, total_brands=len(merged))
            details.append(entry)

        successful = sum(1 for entry in details if entry["success"])
        summary = {
            "total_super_admins": len(admins),
            "total_brands": len(brand_ids),
            "successful": successful,
            "failed": len(details) - successful,
            "total_brands_added": sum(entry["brands_added"] for entry in details),
            "details": details,
        }
        log.info(
            "Super admin brand sync finished",
            successful=summary["successful"],
            failed=summary["failed"],
            brands_added=summary["total_brands_added"],
        )
        return summary

    async def repair_images(self, dry_run: bool = False) -> Dict[str, int]:
        return await ImageRepairService(self.client).repair(dry_run=dry_run)
