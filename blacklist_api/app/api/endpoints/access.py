"""
Access code endpoint.

Approved pilots request a code with their nickname; the code unlocks
the listing while the registry is in restricted mode.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from blacklist_api.app.core.security import get_registry
from blacklist_api.app.schemas.admin import AccessCodeRequest, AccessCodeResponse


router = APIRouter()


@router.post("/request", response_model=AccessCodeResponse)
async def request_access_code(body: Optional[AccessCodeRequest] = None, registry=Depends(get_registry)) -> AccessCodeResponse:
    """Issue an access code to an approved pilot (404 if none matches)."""
    body = body or AccessCodeRequest()
    code = registry.request_access_code(body.nickname)
    return AccessCodeResponse(access_code=code)
