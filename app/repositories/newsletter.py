"""
Newsletter subscriber repository
"""
from typing import Optional

from app.repositories.base import BaseRepository, Row


class NewsletterRepository(BaseRepository):
    table = "newsletter_subscribers"
    resource_name = "Subscriber"

    async def get_by_email(self, email: str) -> Optional[Row]:
        return await self.find_one({"email": email}, columns="id,email,subscription_status,subscribed_at")
