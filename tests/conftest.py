"""
Test configuration and fixtures
"""

import os

# Settings are read once at import; configure before the app loads
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ["CACHE_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "development"
os.environ["SUPER_ADMIN_FALLBACK_EMAILS"] = '["founder@omahub-example.com"]'

import time
from typing import Dict, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt

from app.core.config import settings
from app.core.supabase import get_supabase
from app.main import app
from app.models.profile import Profile
from tests.fakes import FakeSupabase


SUPER_ADMIN_ID = "11111111-1111-1111-1111-111111111111"
BRAND_OWNER_ID = "22222222-2222-2222-2222-222222222222"
CUSTOMER_ID = "33333333-3333-3333-3333-333333333333"
EMPTY_OWNER_ID = "44444444-4444-4444-4444-444444444444"


def make_token(user_id: str, email: Optional[str] = None, expires_in: int = 3600) -> str:
    """Mint an access token the way Supabase Auth signs them"""
    claims = {
        "sub": user_id,
        "email": email,
        "aud": settings.SUPABASE_JWT_AUDIENCE,
        "role": "authenticated",
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(claims, settings.SUPABASE_JWT_SECRET, algorithm="HS256")


def auth_headers(user_id: str, email: Optional[str] = None) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    """Supabase with two brands and one profile per role"""
    fake = FakeSupabase()
    fake.seed(
        "profiles",
        {"id": SUPER_ADMIN_ID, "email": "admin@omahub-example.com", "role": "super_admin", "owned_brands": []},
        {"id": BRAND_OWNER_ID, "email": "owner@adire-example.com", "role": "brand_admin", "owned_brands": ["adire-lagos"]},
        {"id": CUSTOMER_ID, "email": "ada@example.com", "role": "user", "owned_brands": None},
        {"id": EMPTY_OWNER_ID, "email": "new@brand-example.com", "role": "brand_admin", "owned_brands": []},
    )
    fake.seed(
        "brands",
        {
            "id": "adire-lagos",
            "name": "Adire Lagos",
            "description": "Hand-dyed adire textiles",
            "category": "Ready-to-Wear",
            "location": "Lagos, Nigeria",
            "is_verified": True,
            "rating": 0,
            "commission_rate": 10,
        },
        {
            "id": "kente-couture",
            "name": "Kente Couture",
            "description": "Bridal gowns woven with kente",
            "category": "Bridal",
            "location": "Accra, Ghana",
            "is_verified": False,
            "rating": 0,
            "commission_rate": 15,
        },
    )
    return fake


@pytest.fixture
def super_admin() -> Profile:
    return Profile(id=SUPER_ADMIN_ID, email="admin@omahub-example.com", role="super_admin")


@pytest.fixture
def brand_owner() -> Profile:
    return Profile(id=BRAND_OWNER_ID, email="owner@adire-example.com", role="brand_admin", owned_brands=["adire-lagos"])


@pytest.fixture
def customer() -> Profile:
    return Profile(id=CUSTOMER_ID, email="ada@example.com", role="user")


@pytest_asyncio.fixture
async def client(fake_supabase: FakeSupabase):
    """Create test client with the Supabase client overridden"""

    async def get_test_supabase():
        return fake_supabase

    app.dependency_overrides[get_supabase] = get_test_supabase

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
