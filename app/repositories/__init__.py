"""
Repository implementations
"""

from .application import ApplicationRepository
from .base import BaseRepository
from .basket import BasketItemRepository, BasketRepository
from .brand import BrandRepository
from .collection import CollectionRepository
from .faq import FaqRepository
from .favourite import FavouriteRepository
from .feedback import FeedbackRepository
from .inquiry import InquiryReplyRepository, InquiryRepository, NotificationRepository
from .lead import LeadInteractionRepository, LeadRepository
from .legal_document import LegalDocumentRepository
from .newsletter import NewsletterRepository
from .order import OrderItemRepository, OrderRepository, TailoredOrderRepository
from .product import ProductRepository
from .profile import ProfileRepository
from .review import ReviewDetailsRepository, ReviewReplyRepository, ReviewRepository

__all__ = [
    "ApplicationRepository",
    "BaseRepository",
    "BasketItemRepository",
    "BasketRepository",
    "BrandRepository",
    "CollectionRepository",
    "FaqRepository",
    "FavouriteRepository",
    "FeedbackRepository",
    "InquiryReplyRepository",
    "InquiryRepository",
    "LeadInteractionRepository",
    "LeadRepository",
    "LegalDocumentRepository",
    "NewsletterRepository",
    "NotificationRepository",
    "OrderItemRepository",
    "OrderRepository",
    "ProductRepository",
    "ProfileRepository",
    "ReviewDetailsRepository",
    "ReviewReplyRepository",
    "ReviewRepository",
    "TailoredOrderRepository",
]
