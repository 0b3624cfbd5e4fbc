"""
Feedback repository
"""
from app.repositories.base import BaseRepository


class FeedbackRepository(BaseRepository):
    table = "feedback"
    resource_name = "Feedback"
