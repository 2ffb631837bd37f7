"""
Pydantic models for pilot registration and the public listing.

Field names follow the snake_case convention in Python while the
JSON payloads keep the camelCase keys used by the frontend
(``photoUrl``, ``accessCodes``, ...) through aliases.  Request fields
are optional at the schema level: presence is checked by
``RegistryService`` so that a missing value produces the service's
own 400 response instead of a generic validation error.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class CamelModel(BaseModel):
    model_config = {
        "populate_by_name": True,
        # Clients sometimes send numeric nicknames or ids; keep them as text.
        "coerce_numbers_to_str": True,
    }


class PilotCreate(CamelModel):
    """Registration form."""

    nickname: Optional[str] = Field(None, examples=["Ana"])
    car: Optional[str] = Field(None, examples=["Dacia 1310"])
    photo_url: Optional[str] = Field(None, alias="photoUrl", examples=["https://example.com/ana.jpg"])


class RegisterResponse(CamelModel):
    ok: bool = True
    id: str


class PilotPublic(CamelModel):
    """Entry of the ranked public listing."""

    id: str
    rank: int
    nickname: str
    car: str
    photo_url: str = Field("", alias="photoUrl")


class PilotList(CamelModel):
    pilots: List[PilotPublic]


class PilotRead(CamelModel):
    """Full pilot record, including internal fields (admin only)."""

    id: str
    nickname: str
    car: str
    photo_url: str = Field("", alias="photoUrl")
    status: str
    rank: Optional[int] = None
    access_codes: List[str] = Field(default_factory=list, alias="accessCodes")


class ApplicantList(CamelModel):
    applicants: List[PilotRead]


class ConfigRead(CamelModel):
    """Visibility state as seen by clients.

    ``publicMode`` is the *effective* value, i.e. already forced to
    ``true`` while fewer than ``minPublicSignups`` pilots are registered.
    """

    public_mode: bool = Field(..., alias="publicMode")
    total_pilots: int = Field(..., alias="totalPilots")
    min_public_signups: int = Field(..., alias="minPublicSignups")
