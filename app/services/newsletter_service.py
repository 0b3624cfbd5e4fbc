"""
Newsletter subscriptions
"""

from typing import Any, Dict

from app.core.exceptions import ConflictError
from app.core.logging import log
from app.models.enums import SubscriptionStatus
from app.repositories.newsletter import NewsletterRepository
from app.schemas.contact import NewsletterSubscribe
from app.utils.normalization import normalize_email
from app.utils.timestamps import utc_now_iso

DEFAULT_PREFERENCES = {"marketing": True, "designer_updates": True, "events": True}


class NewsletterService:
    def __init__(self, client: Any):
        self.subscriber_repo = NewsletterRepository(client)

    async def subscribe(self, subscription: NewsletterSubscribe) -> Dict[str, Any]:
        """
        Subscribe an email.

        Active subscribers get a conflict, unsubscribed ones are reactivated.
        """
        email = normalize_email(subscription.email)
        existing = await self.subscriber_repo.get_by_email(email)

        if existing and existing.get("subscription_status") == SubscriptionStatus.ACTIVE.value:
            raise ConflictError("This email is already subscribed to our newsletter")

        now = utc_now_iso()
        if existing:
            await self.subscriber_repo.update(
                id=existing["id"],
                obj_in={
                    "subscription_status": SubscriptionStatus.ACTIVE.value,
                    "unsubscribed_at": None,
                    "updated_at": now,
                },
            )
            log.info("Newsletter subscription reactivated", subscriber_id=existing["id"])
            return {
                "success": True,
                "message": "Welcome back! Your subscription has been reactivated.",
                "reactivated": True,
            }

        subscriber = await self.subscriber_repo.create(
            {
                "email": email,
                "first_name": subscription.first_name,
                "last_name": subscription.last_name,
                "source": subscription.source,
                "subscription_status": SubscriptionStatus.ACTIVE.value,
                "subscribed_at": now,
                "preferences": dict(DEFAULT_PREFERENCES),
            }
        )
        log.info("Newsletter subscriber added", subscriber_id=subscriber.get("id"), source=subscription.source)
        return {
            "success": True,
            "message": "Successfully subscribed to our newsletter!",
            "subscriber": {"id": subscriber.get("id"), "email": email},
        }
