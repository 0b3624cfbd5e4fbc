"""
Typed views over BaaS rows
"""

from .enums import (
    ApplicationStatus,
    FavouriteItemType,
    InquiryStatus,
    LeadStatus,
    LegalDocumentType,
    OrderStatus,
    Priority,
    SubscriptionStatus,
)
from .profile import ADMIN_ROLES, STUDIO_ROLES, Profile, UserRole

__all__ = [
    "ADMIN_ROLES",
    "STUDIO_ROLES",
    "ApplicationStatus",
    "FavouriteItemType",
    "InquiryStatus",
    "LeadStatus",
    "LegalDocumentType",
    "OrderStatus",
    "Priority",
    "Profile",
    "SubscriptionStatus",
    "UserRole",
]
