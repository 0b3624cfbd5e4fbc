"""
Session maintenance endpoints
"""
from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from app.core.logging import log
from app.core.security import find_corrupted_auth_cookies


router = APIRouter()


@router.post("/session/clear", summary="Clear corrupted auth cookies")
async def clear_corrupted_session(request: Request) -> ORJSONResponse:
    """
    Expire Supabase auth cookies that can no longer be decoded.

    Browsers keep such cookies after client library upgrades and every
    request then fails to authenticate.
    """
    corrupted = find_corrupted_auth_cookies(request.cookies)
    response = ORJSONResponse({"success": True, "cleared": corrupted})
    for name in corrupted:
        response.delete_cookie(name, path="/")

    if corrupted:
        log.info("Cleared corrupted auth cookies", cookies=corrupted)
    return response
