"""
Admin endpoints.

``/login`` exchanges the shared admin password for a token.  Every
other route requires that token in the ``x-admin-token`` header (or
as ``Authorization: Bearer <token>``) and answers 401 without it.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from blacklist_api.app.core.security import get_registry, require_admin
from blacklist_api.app.schemas.admin import (
    AdminLogin,
    ApproveRequest,
    LoginResponse,
    OkResponse,
    PrivacyResponse,
    ReorderRequest,
)
from blacklist_api.app.schemas.pilot import ApplicantList


router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def admin_login(body: Optional[AdminLogin] = None, registry=Depends(get_registry)) -> LoginResponse:
    """Authenticate with the admin password and return a fresh token."""
    # A request without a body is a login without a password.
    body = body or AdminLogin()
    return LoginResponse(token=registry.admin_login(body.password))


@router.post("/logout", response_model=OkResponse)
async def admin_logout(token: str = Depends(require_admin), registry=Depends(get_registry)) -> OkResponse:
    """Invalidate the token used for this request."""
    registry.admin_logout(token)
    return OkResponse()


@router.get("/applicants", response_model=ApplicantList, dependencies=[Depends(require_admin)])
async def list_applicants(registry=Depends(get_registry)) -> ApplicantList:
    """Return all pending pilots with their full records."""
    return ApplicantList(applicants=registry.list_applicants())


@router.post("/approve", response_model=OkResponse, dependencies=[Depends(require_admin)])
async def approve_pilot(body: Optional[ApproveRequest] = None, registry=Depends(get_registry)) -> OkResponse:
    """Approve a pilot (it is ranked last) or reject it (it is deleted)."""
    body = body or ApproveRequest()
    registry.approve_or_reject(body.id, body.approve)
    return OkResponse()


@router.post("/reorder", response_model=OkResponse, dependencies=[Depends(require_admin)])
async def reorder_pilots(body: Optional[ReorderRequest] = None, registry=Depends(get_registry)) -> OkResponse:
    """Rank approved pilots in the order of ``orderedIds``."""
    body = body or ReorderRequest()
    registry.reorder(body.ordered_ids)
    return OkResponse()


@router.post(
    "/toggle-privacy",
    response_model=PrivacyResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
async def toggle_privacy(registry=Depends(get_registry)) -> PrivacyResponse:
    """Switch between public and restricted listing.

    Below the minimum number of signups the listing stays public and the
    response carries a ``note`` saying so.
    """
    return PrivacyResponse(**registry.toggle_privacy())
