"""
Common schemas used across the API
"""
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.pagination import page_range


T = TypeVar("T")


class PaginationParams(BaseModel):
    """Pagination parameters for list endpoints"""
    page: int = Field(default=1, ge=1, description="1-based page number")
    limit: int = Field(default=20, ge=1, le=100, description="Number of items to return")

    @property
    def offset(self) -> int:
        return page_range(self.page, self.limit)[0]

    @property
    def end(self) -> int:
        return page_range(self.page, self.limit)[1]


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response"""
    items: List[T]
    total: int
    page: int
    limit: int
    total_pages: int
    has_more: bool


class MessageResponse(BaseModel):
    """Acknowledgement for writes that return no row"""
    success: bool = True
    message: str
    data: Optional[Dict[str, Any]] = None


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str = "ok"
    timestamp: str
    version: str
    supabase: str = "unknown"


class RequestModel(BaseModel):
    """Request bodies accept snake_case and the web client's camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)
