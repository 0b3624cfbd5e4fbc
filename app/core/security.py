"""
Security utilities for Supabase session authentication
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import orjson
from fastapi import Request
from jose import JWTError, jwt

from app.core.config import settings
from app.core.exceptions import UnauthorizedError
from app.core.logging import log

# Cookies that may carry the Supabase session, checked in order
SESSION_COOKIE_NAMES = ("sb-access-token", "supabase-auth-token")
BASE64_PREFIX = "base64-"


@dataclass
class AuthUser:
    """Identity behind a verified access token"""

    id: str
    email: Optional[str] = None


def decode_cookie_payload(value: str) -> Optional[Any]:
    """
    Decode a Supabase auth cookie value.

    Values are either raw JSON or JSON encoded as base64 behind a
    ``base64-`` prefix. Returns None when the value is neither.
    """
    if not value:
        return None

    raw = value
    if value.startswith(BASE64_PREFIX):
        encoded = value[len(BASE64_PREFIX):]
        try:
            # Browsers drop base64 padding from cookie values
            raw = base64.b64decode(encoded + "=" * (-len(encoded) % 4)).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return None

    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return None


def _token_from_payload(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        token = payload.get("access_token")
        return token if isinstance(token, str) else None
    # supabase-js v1 stored [access_token, refresh_token, ...]
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return None


def _is_project_auth_cookie(name: str) -> bool:
    return name.startswith("sb-") and name.endswith("-auth-token")


def token_from_cookies(cookies: Mapping[str, str]) -> Optional[str]:
    """Find the access token in the session cookies"""
    for name in SESSION_COOKIE_NAMES:
        value = cookies.get(name)
        if not value:
            continue
        token = _token_from_payload(decode_cookie_payload(value))
        if token:
            return token
        # sb-access-token holds the bare JWT
        if name == "sb-access-token":
            return value

    for name, value in cookies.items():
        if _is_project_auth_cookie(name):
            token = _token_from_payload(decode_cookie_payload(value))
            if token:
                return token

    return None


def extract_access_token(request: Request) -> Optional[str]:
    """Bearer header first, then session cookies"""
    authorization = request.headers.get("Authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()

    return token_from_cookies(request.cookies)


def find_corrupted_auth_cookies(cookies: Mapping[str, str]) -> List[str]:
    """
    Names of ``sb-*`` cookies whose value can't be decoded.

    ``sb-access-token`` is a bare JWT and is never reported.
    """
    corrupted = []
    for name, value in cookies.items():
        if not name.startswith("sb-") or name == "sb-access-token":
            continue
        if decode_cookie_payload(value) is None:
            corrupted.append(name)
    return corrupted


def decode_local_token(token: str) -> Dict[str, Any]:
    """Verify a Supabase JWT with the project secret"""
    return jwt.decode(
        token,
        settings.SUPABASE_JWT_SECRET,
        algorithms=["HS256"],
        audience=settings.SUPABASE_JWT_AUDIENCE,
    )


async def verify_access_token(client: Any, token: str) -> AuthUser:
    """
    Resolve the user behind an access token.

    Tokens are checked locally when SUPABASE_JWT_SECRET is configured,
    otherwise Supabase Auth is asked.
    """
    if settings.SUPABASE_JWT_SECRET:
        try:
            claims = decode_local_token(token)
        except JWTError as e:
            log.warning(f"JWT validation failed: {e}")
            raise UnauthorizedError("Invalid or expired token")

        if not claims.get("sub"):
            raise UnauthorizedError("Invalid or expired token")
        return AuthUser(id=claims["sub"], email=claims.get("email"))

    try:
        response = await client.auth.get_user(token)
    except Exception as e:
        log.warning(f"Supabase token lookup failed: {e}")
        raise UnauthorizedError("Invalid or expired token")

    user = getattr(response, "user", None)
    if user is None:
        raise UnauthorizedError("Invalid or expired token")
    return AuthUser(id=str(user.id), email=getattr(user, "email", None))


def get_client_ip(request: Request) -> str:
    """
    Get client IP address for rate limiting and logging
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"
