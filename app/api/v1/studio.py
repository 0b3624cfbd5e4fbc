"""
Studio endpoints for admins and brand owners: brands, products, orders,
uploads and designer applications
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, BackgroundTasks, File, Form, Query, UploadFile, status

from app.api.deps import (
    AdminProfileDep,
    ApplicationServiceDep,
    BrandServiceDep,
    ImageHostingServiceDep,
    OrderServiceDep,
    PaginationDep,
    ProductServiceDep,
    StudioProfileDep,
    SuperAdminProfileDep,
)
from app.core.cache import invalidate_namespace
from app.core.permissions import ensure_can_manage_brand
from app.models.enums import OrderStatus
from app.schemas.admin import ApplicationStatusUpdate
from app.schemas.brand import BrandCreate, BrandUpdate
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.order import OrderStatusUpdate
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.brand_service import BRAND_CACHE_NAMESPACE


router = APIRouter()


# Brands
@router.get("/brands", summary="Brands the caller manages")
async def list_studio_brands(profile: StudioProfileDep, brand_service: BrandServiceDep) -> List[Dict[str, Any]]:
    return await brand_service.list_studio_brands(profile)


@router.post("/brands", status_code=status.HTTP_201_CREATED, summary="Create brand")
async def create_brand(
    brand_in: BrandCreate,
    profile: AdminProfileDep,
    brand_service: BrandServiceDep,
    background_tasks: BackgroundTasks,
) -> Dict[str, Any]:
    """The brand id is the slug of its name, so names must be unique"""
    brand = await brand_service.create_brand(profile, brand_in)
    background_tasks.add_task(invalidate_namespace, BRAND_CACHE_NAMESPACE)
    return brand


@router.get("/brands/{brand_id}", summary="Get a managed brand")
async def get_studio_brand(brand_id: str, profile: StudioProfileDep, brand_service: BrandServiceDep) -> Dict[str, Any]:
    ensure_can_manage_brand(profile, brand_id)
    return await brand_service.get_brand(brand_id)


@router.patch("/brands/{brand_id}", summary="Update brand")
async def update_brand(
    brand_id: str,
    brand_update: BrandUpdate,
    profile: StudioProfileDep,
    brand_service: BrandServiceDep,
    background_tasks: BackgroundTasks,
) -> Dict[str, Any]:
    brand = await brand_service.update_brand(profile, brand_id, brand_update)
    background_tasks.add_task(invalidate_namespace, BRAND_CACHE_NAMESPACE)
    return brand


@router.delete("/brands/{brand_id}", response_model=MessageResponse, summary="Delete brand")
async def delete_brand(
    brand_id: str,
    profile: AdminProfileDep,
    brand_service: BrandServiceDep,
    background_tasks: BackgroundTasks,
) -> MessageResponse:
    brand = await brand_service.delete_brand(profile, brand_id)
    background_tasks.add_task(invalidate_namespace, BRAND_CACHE_NAMESPACE)
    return MessageResponse(message=f"Brand '{brand.get('name')}' deleted successfully")


# Products
@router.get("/products", summary="Products of the caller's brands")
async def list_studio_products(profile: StudioProfileDep, product_service: ProductServiceDep) -> List[Dict[str, Any]]:
    return await product_service.list_studio_products(profile)


@router.post("/products", status_code=status.HTTP_201_CREATED, summary="Create product")
async def create_product(
    product_in: ProductCreate,
    profile: StudioProfileDep,
    product_service: ProductServiceDep,
) -> Dict[str, Any]:
    return await product_service.create_product(profile, product_in)


@router.patch("/products/{product_id}", summary="Update product")
async def update_product(
    product_id: str,
    product_update: ProductUpdate,
    profile: StudioProfileDep,
    product_service: ProductServiceDep,
) -> Dict[str, Any]:
    return await product_service.update_product(profile, product_id, product_update)


@router.delete("/products/{product_id}", response_model=MessageResponse, summary="Delete product")
async def delete_product(
    product_id: str,
    profile: StudioProfileDep,
    product_service: ProductServiceDep,
) -> MessageResponse:
    await product_service.delete_product(profile, product_id)
    return MessageResponse(message="Product deleted successfully")


# Orders
@router.get("/orders", response_model=PaginatedResponse[Dict[str, Any]], summary="Orders for the caller's brands")
async def list_studio_orders(
    profile: StudioProfileDep,
    order_service: OrderServiceDep,
    pagination: PaginationDep,
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
) -> Dict[str, Any]:
    return await order_service.studio_orders(
        profile,
        page=pagination.page,
        limit=pagination.limit,
        offset=pagination.offset,
        end=pagination.end,
        status=order_status.value if order_status else None,
    )


@router.patch("/orders/{order_id}", summary="Move an order along")
async def update_order_status(
    order_id: str,
    update: OrderStatusUpdate,
    profile: StudioProfileDep,
    order_service: OrderServiceDep,
) -> Dict[str, Any]:
    return await order_service.update_order_status(profile, order_id, update.status)


@router.get("/custom-orders", response_model=PaginatedResponse[Dict[str, Any]], summary="Made-to-measure requests")
async def list_studio_custom_orders(
    profile: StudioProfileDep,
    order_service: OrderServiceDep,
    pagination: PaginationDep,
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
) -> Dict[str, Any]:
    return await order_service.studio_custom_orders(
        profile,
        page=pagination.page,
        limit=pagination.limit,
        offset=pagination.offset,
        end=pagination.end,
        status=order_status.value if order_status else None,
    )


@router.patch("/custom-orders/{order_id}", summary="Move a made-to-measure order along")
async def update_custom_order_status(
    order_id: str,
    update: OrderStatusUpdate,
    profile: StudioProfileDep,
    order_service: OrderServiceDep,
) -> Dict[str, Any]:
    return await order_service.update_custom_order_status(profile, order_id, update.status)


# Uploads
@router.post("/uploads", status_code=status.HTTP_201_CREATED, summary="Upload a brand image")
async def upload_image(
    profile: StudioProfileDep,
    image_service: ImageHostingServiceDep,
    brand_id: str = Form(...),
    kind: str = Form("brands"),
    file: UploadFile = File(...),
) -> Dict[str, str]:
    """
    Upload an image for a brand, its collections or products.

    Images are resized and re-encoded before they are stored.
    """
    data = await file.read()
    return await image_service.upload_brand_image(
        profile,
        brand_id=brand_id,
        kind=kind,
        data=data,
        content_type=file.content_type or "",
    )


# Designer applications
@router.get("/applications", summary="Designer applications")
async def list_applications(
    profile: SuperAdminProfileDep,
    application_service: ApplicationServiceDep,
) -> Dict[str, Any]:
    return await application_service.list_applications(profile)


@router.patch("/applications/{application_id}", summary="Review an application")
async def update_application(
    application_id: str,
    update: ApplicationStatusUpdate,
    profile: SuperAdminProfileDep,
    application_service: ApplicationServiceDep,
) -> Dict[str, Any]:
    return await application_service.update_status(profile, application_id, update)
