"""
Pydantic models for access codes and the admin panel.
"""

from typing import Any, Optional

from pydantic import Field

from .pilot import CamelModel


class AccessCodeRequest(CamelModel):
    nickname: Optional[str] = Field(None, examples=["Ana"])


class AccessCodeResponse(CamelModel):
    ok: bool = True
    access_code: str = Field(..., alias="accessCode")


class AdminLogin(CamelModel):
    password: Optional[str] = None


class LoginResponse(CamelModel):
    ok: bool = True
    token: str


class ApproveRequest(CamelModel):
    """Approve (``approve=true``) or reject a pilot.

    A missing ``approve`` flag counts as a rejection.
    """

    id: Optional[str] = None
    approve: bool = False


class ReorderRequest(CamelModel):
    # Left untyped so that a non-list value reaches the service and is
    # reported with the registry's own error message.
    ordered_ids: Optional[Any] = Field(None, alias="orderedIds", examples=[["ABCD2345", "EFGH6789"]])


class OkResponse(CamelModel):
    ok: bool = True


class PrivacyResponse(CamelModel):
    ok: bool = True
    public_mode: bool = Field(..., alias="publicMode")
    note: Optional[str] = None
