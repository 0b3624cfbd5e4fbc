"""
API v1 routers
"""

from fastapi import APIRouter

from .admin import router as admin_router
from .auth import router as auth_router
from .basket import router as basket_router
from .brands import router as brands_router
from .collections import router as collections_router
from .contact import router as contact_router
from .faqs import router as faqs_router
from .favourites import router as favourites_router
from .health import router as health_router
from .inbox import router as inbox_router
from .leads import router as leads_router
from .legal import router as legal_router
from .orders import router as orders_router
from .products import router as products_router
from .reviews import router as reviews_router
from .studio import router as studio_router

api_router = APIRouter()

# Include routers
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(brands_router, prefix="/brands", tags=["brands"])
api_router.include_router(collections_router, prefix="/collections", tags=["collections"])
api_router.include_router(products_router, prefix="/products", tags=["products"])
api_router.include_router(reviews_router, prefix="/reviews", tags=["reviews"])
api_router.include_router(favourites_router, prefix="/favourites", tags=["favourites"])
api_router.include_router(basket_router, prefix="/basket", tags=["basket"])
api_router.include_router(orders_router, prefix="/orders", tags=["orders"])
api_router.include_router(contact_router, tags=["forms"])
api_router.include_router(leads_router, prefix="/leads", tags=["leads"])
api_router.include_router(faqs_router, prefix="/faqs", tags=["faqs"])
api_router.include_router(legal_router, prefix="/legal-documents", tags=["legal"])
api_router.include_router(inbox_router, prefix="/studio/inbox", tags=["studio"])
api_router.include_router(studio_router, prefix="/studio", tags=["studio"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
