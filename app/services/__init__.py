"""
Service layer for business logic
"""

from .admin_service import AdminService
from .application_service import ApplicationService
from .basket_service import BasketService
from .brand_service import BrandService
from .collection_service import CollectionService
from .contact_service import ContactService, FeedbackService
from .faq_service import FaqService
from .favourite_service import FavouriteService
from .image_hosting_service import ImageHostingService
from .image_repair_service import ImageRepairService
from .inbox_service import InboxService
from .lead_service import LeadService
from .legal_document_service import LegalDocumentService
from .newsletter_service import NewsletterService
from .order_service import OrderService
from .product_service import ProductService
from .review_reply_service import ReviewReplyService
from .review_service import ReviewService

__all__ = [
    "AdminService",
    "ApplicationService",
    "BasketService",
    "BrandService",
    "CollectionService",
    "ContactService",
    "FaqService",
    "FavouriteService",
    "FeedbackService",
    "ImageHostingService",
    "ImageRepairService",
    "InboxService",
    "LeadService",
    "LegalDocumentService",
    "NewsletterService",
    "OrderService",
    "ProductService",
    "ReviewReplyService",
    "ReviewService",
]
