"""
Public pilot endpoints.

Registration, the visibility config and the ranked listing.  None of
these require an admin token; the listing may require an access code
when the registry is in restricted mode.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header

from blacklist_api.app.core.security import get_registry
from blacklist_api.app.schemas.pilot import ConfigRead, PilotCreate, PilotList, RegisterResponse


router = APIRouter()


@router.get("/config", response_model=ConfigRead)
async def get_config(registry=Depends(get_registry)) -> ConfigRead:
    """Return the effective public mode and the signup counters."""
    return ConfigRead(**registry.get_config())


@router.post("/register", response_model=RegisterResponse)
async def register_pilot(pilot: Optional[PilotCreate] = None, registry=Depends(get_registry)) -> RegisterResponse:
    """Register a new pilot.

    The pilot starts as ``pending`` and only appears in the listing
    after an administrator approves it.
    """
    pilot = pilot or PilotCreate()
    pilot_id = registry.register(pilot.nickname, pilot.car, pilot.photo_url)
    return RegisterResponse(id=pilot_id)


@router.get("/list", response_model=PilotList)
async def list_pilots(
    x_access_code: Optional[str] = Header(None),
    registry=Depends(get_registry),
) -> PilotList:
    """List approved pilots by rank.

    In restricted mode the ``x-access-code`` header must carry a code
    obtained from ``/access/request``, otherwise HTTP 403 is returned.
    """
    return PilotList(pilots=registry.list_approved(x_access_code))
