"""
Studio inbox: customer inquiries, replies and notifications.

Everything is narrowed to the caller's brand scope; an inquiry outside the
scope is reported as missing.
"""

from collections import Counter
from typing import Any, Dict, List

from app.core.exceptions import BaseAPIException, NotFoundError
from app.core.logging import log
from app.core.permissions import require_studio
from app.models.enums import InquiryStatus
from app.models.profile import Profile
from app.repositories.inquiry import InquiryReplyRepository, InquiryRepository, NotificationRepository
from app.schemas.inbox import InquiryUpdate, ReplyCreate
from app.utils.timestamps import start_of_day, start_of_week, utc_now, utc_now_iso

STAT_COUNTERS = ("total_inquiries", "unread_inquiries", "replied_inquiries", "urgent_inquiries")


def empty_stats() -> Dict[str, Any]:
    stats: Dict[str, Any] = {name: 0 for name in STAT_COUNTERS}
    stats.update(
        today_inquiries=0,
        this_week_inquiries=0,
        inquiries_by_type={},
        inquiries_by_priority={},
        inquiries_by_status={},
    )
    return stats


class InboxService:
    """Service layer for the studio inbox"""

    def __init__(self, client: Any):
        self.inquiry_repo = InquiryRepository(client)
        self.reply_repo = InquiryReplyRepository(client)
        self.notification_repo = NotificationRepository(client)

    async def list_inbox(self, profile: Profile) -> Dict[str, List[Dict[str, Any]]]:
        require_studio(profile)
        scope = profile.brand_scope()
        inquiries = [] if scope == [] else await self.inquiry_repo.scoped(scope)

        try:
            notifications = await self.notification_repo.for_user(profile.id, scope)
        except BaseAPIException as e:
            log.warning("Failed to load notifications", user_id=profile.id, error=e.detail)
            notifications = []

        return {"inquiries": inquiries, "notifications": notifications}

    async def stats(self, profile: Profile) -> Dict[str, Any]:
        """Counters for the inbox header; today and this week are UTC, weeks start on Sunday"""
        require_studio(profile)
        scope = profile.brand_scope()
        if scope == []:
            return empty_stats()

        stats = empty_stats()
        totals = await self.inquiry_repo.inbox_stats(profile.id)
        for name in STAT_COUNTERS:
            stats[name] = int(totals.get(name) or 0)

        now = utc_now()
        stats["today_inquiries"] = await self.inquiry_repo.count_since(scope, start_of_day(now).isoformat())
        stats["this_week_inquiries"] = await self.inquiry_repo.count_since(scope, start_of_week(now).isoformat())

        rows = await self.inquiry_repo.breakdown_rows(scope)
        stats["inquiries_by_type"] = dict(Counter(row["inquiry_type"] for row in rows if row.get("inquiry_type")))
        stats["inquiries_by_priority"] = dict(Counter(row["priority"] for row in rows if row.get("priority")))
        stats["inquiries_by_status"] = dict(Counter(row["status"] for row in rows if row.get("status")))
        return stats

    async def _scoped_inquiry(self, profile: Profile, inquiry_id: str) -> Dict[str, Any]:
        require_studio(profile)
        scope = profile.brand_scope()
        inquiry = None if scope == [] else await self.inquiry_repo.get_scoped(inquiry_id, scope)
        if not inquiry:
            raise NotFoundError("Inquiry not found")
        return inquiry

    async def get_inquiry(self, profile: Profile, inquiry_id: str) -> Dict[str, Any]:
        inquiry = await self._scoped_inquiry(profile, inquiry_id)
        replies = await self.reply_repo.for_inquiry(inquiry_id)
        return {**inquiry, "replies": replies}

    async def update_inquiry(self, profile: Profile, inquiry_id: str, update: InquiryUpdate) -> Dict[str, Any]:
        await self._scoped_inquiry(profile, inquiry_id)

        changes: Dict[str, Any] = {"updated_at": utc_now_iso()}
        if update.status is not None:
            changes["status"] = update.status.value
        if update.is_read is not None:
            changes["is_read"] = update.is_read

        inquiry = await self.inquiry_repo.update(id=inquiry_id, obj_in=changes)
        if not inquiry:
            raise NotFoundError("Inquiry not found")

        if update.reply:
            await self.reply_repo.create(
                {
                    "inquiry_id": inquiry_id,
                    "admin_id": profile.id,
                    "message": update.reply,
                    "is_brand_reply": profile.is_brand_admin,
                }
            )
            log.info("Reply recorded with inquiry update", inquiry_id=inquiry_id, user_id=profile.id)

        return inquiry

    async def delete_inquiry(self, profile: Profile, inquiry_id: str) -> None:
        await self._scoped_inquiry(profile, inquiry_id)
        await self.reply_repo.delete_for_inquiry(inquiry_id)
        await self.inquiry_repo.delete(id=inquiry_id)
        log.info("Deleted inquiry", inquiry_id=inquiry_id, user_id=profile.id)

    async def list_replies(self, profile: Profile, inquiry_id: str) -> List[Dict[str, Any]]:
        await self._scoped_inquiry(profile, inquiry_id)
        return await self.reply_repo.for_inquiry(inquiry_id)

    async def add_reply(self, profile: Profile, inquiry_id: str, reply_in: ReplyCreate) -> Dict[str, Any]:
        """Internal notes stay private and leave the inquiry status alone"""
        await self._scoped_inquiry(profile, inquiry_id)

        now = utc_now_iso()
        reply = await self.reply_repo.create(
            {
                "inquiry_id": inquiry_id,
                "admin_id": profile.id,
                "message": reply_in.message,
                "is_internal_note": reply_in.is_internal_note,
                "is_brand_reply": profile.is_brand_admin,
                "created_at": now,
            }
        )

        if not reply_in.is_internal_note:
            await self.inquiry_repo.update(
                id=inquiry_id,
                obj_in={"status": InquiryStatus.REPLIED.value, "replied_at": now, "updated_at": now},
            )

        return reply
