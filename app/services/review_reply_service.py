"""
Brand replies to customer reviews
"""

from typing import Any, Dict, List

from app.core.exceptions import ForbiddenError, NotFoundError
from app.core.logging import log
from app.core.permissions import in_scope, require_studio
from app.models.profile import Profile
from app.repositories.profile import ProfileRepository
from app.repositories.review import ReviewReplyRepository, ReviewRepository
from app.schemas.review import ReviewReplyCreate, ReviewReplyUpdate
from app.utils.timestamps import utc_now_iso


def display_name(author: Dict[str, Any]) -> str:
    """First and last name when both are set, else the email"""
    if author.get("first_name") and author.get("last_name"):
        return f"{author['first_name']} {author['last_name']}"
    return author.get("email") or ""


class ReviewReplyService:
    """Replies are written by admins and by owners of the reviewed brand"""

    def __init__(self, client: Any):
        self.reply_repo = ReviewReplyRepository(client)
        self.review_repo = ReviewRepository(client)
        self.profile_repo = ProfileRepository(client)

    async def _review_in_scope(self, profile: Profile, review_id: str) -> Dict[str, Any]:
        review = await self.review_repo.get(id=review_id, columns="id,brand_id")
        if not review:
            raise NotFoundError("Review not found")
        if not in_scope(profile.brand_scope(), review.get("brand_id")):
            raise ForbiddenError("Access denied to this review")
        return review

    async def _own_reply(self, profile: Profile, reply_id: str, action: str) -> Dict[str, Any]:
        reply = await self.reply_repo.get(id=reply_id)
        if not reply:
            raise NotFoundError("Reply not found")
        if not profile.is_admin and reply.get("admin_id") != profile.id:
            raise ForbiddenError(f"You can only {action} your own replies")
        return reply

    async def _with_author(self, reply: Dict[str, Any]) -> Dict[str, Any]:
        author = await self.profile_repo.get(id=reply.get("admin_id"), columns="id,email,first_name,last_name")
        return {**reply, "admin_name": display_name(author or {})}

    async def list_replies(self, profile: Profile, review_id: str) -> List[Dict[str, Any]]:
        require_studio(profile)
        await self._review_in_scope(profile, review_id)
        replies = await self.reply_repo.for_review(review_id)

        authors = await self.profile_repo.get_many(
            list({reply.get("admin_id") for reply in replies if reply.get("admin_id")}),
            columns="id,email,first_name,last_name",
        )
        names = {author["id"]: display_name(author) for author in authors}
        return [{**reply, "admin_name": names.get(reply.get("admin_id"), "")} for reply in replies]

    async def create_reply(self, profile: Profile, reply_in: ReviewReplyCreate) -> Dict[str, Any]:
        require_studio(profile)
        review = await self._review_in_scope(profile, reply_in.review_id)

        now = utc_now_iso()
        reply = await self.reply_repo.create(
            {
                "review_id": review["id"],
                "admin_id": profile.id,
                "reply_text": reply_in.reply_text,
                "created_at": now,
                "updated_at": now,
            }
        )
        log.info("Review reply created", review_id=review["id"], brand_id=review.get("brand_id"), user_id=profile.id)
        return await self._with_author(reply)

    async def update_reply(self, profile: Profile, reply_in: ReviewReplyUpdate) -> Dict[str, Any]:
        require_studio(profile)
        await self._own_reply(profile, reply_in.reply_id, "update")
        reply = await self.reply_repo.update(
            id=reply_in.reply_id, obj_in={"reply_text": reply_in.reply_text, "updated_at": utc_now_iso()}
        )
        log.info("Review reply updated", reply_id=reply_in.reply_id, user_id=profile.id)
        return await self._with_author(reply)

    async def delete_reply(self, profile: Profile, reply_id: str) -> None:
        require_studio(profile)
        await self._own_reply(profile, reply_id, "delete")
        await self.reply_repo.delete(id=reply_id)
        log.info("Review reply deleted", reply_id=reply_id, user_id=profile.id)
