"""
API Schemas (Pydantic models for request/response)
"""

from .admin import ApplicationStatusUpdate, UserUpsert
from .basket import BasketItemCreate, BasketItemUpdate
from .brand import BrandCreate, BrandUpdate
from .common import HealthCheckResponse, MessageResponse, PaginatedResponse, PaginationParams, RequestModel
from .contact import ContactRequest, FeedbackCreate, NewsletterSubscribe
from .faq import FaqCreate, FaqUpdate
from .favourite import FavouriteCreate
from .inbox import InquiryUpdate, ReplyCreate
from .lead import LeadCreate, LeadUpdate, LeadUpdateRequest
from .legal import LegalDocumentCreate, LegalDocumentUpdate
from .order import CustomOrderCreate, OrderStatusUpdate
from .product import ProductCreate, ProductUpdate
from .review import ReviewCreate, ReviewReplyCreate, ReviewReplyUpdate

__all__ = [
    "ApplicationStatusUpdate",
    "BasketItemCreate",
    "BasketItemUpdate",
    "BrandCreate",
    "BrandUpdate",
    "ContactRequest",
    "CustomOrderCreate",
    "FaqCreate",
    "FaqUpdate",
    "FavouriteCreate",
    "FeedbackCreate",
    "HealthCheckResponse",
    "InquiryUpdate",
    "LeadCreate",
    "LeadUpdate",
    "LeadUpdateRequest",
    "LegalDocumentCreate",
    "LegalDocumentUpdate",
    "MessageResponse",
    "NewsletterSubscribe",
    "OrderStatusUpdate",
    "PaginatedResponse",
    "PaginationParams",
    "ProductCreate",
    "ProductUpdate",
    "RequestModel",
    "ReplyCreate",
    "ReviewCreate",
    "ReviewReplyCreate",
    "ReviewReplyUpdate",
    "UserUpsert",
]
