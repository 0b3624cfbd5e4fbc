"""
Application configuration using Pydantic settings
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # Application
    PROJECT_NAME: str = "OmaHub API"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1
    SENTRY_DSN: Optional[str] = None
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Supabase
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_ANON_KEY: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    # When set, access tokens are verified locally instead of via auth.get_user
    SUPABASE_JWT_SECRET: Optional[str] = None
    SUPABASE_JWT_AUDIENCE: str = "authenticated"

    # Profiles without a row that are still treated as super admins
    SUPER_ADMIN_FALLBACK_EMAILS: List[str] = []

    # Cache
    REDIS_URL: Optional[str] = None
    CACHE_ENABLED: bool = True
    CACHE_TTL: int = 300  # 5 minutes

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    PUBLIC_FORM_RATE_LIMIT: str = "10/minute"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # Storage
    BRAND_ASSETS_BUCKET: str = "brand-assets"
    PROFILES_BUCKET: str = "profiles"
    PRODUCT_IMAGES_BUCKET: str = "product-images"
    MAX_UPLOAD_BYTES: int = 5242880  # 5MB
    MAX_IMAGE_DIMENSION: int = 2000
    LEGACY_IMAGE_MARKER: str = "/lovable-uploads/"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def storage_public_base(self) -> str:
        """Base URL for public storage objects"""
        return f"{self.SUPABASE_URL.rstrip('/')}/storage/v1/object/public"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
