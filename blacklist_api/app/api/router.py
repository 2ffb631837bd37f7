"""
Top‑level API router.

Aggregates the domain routers under the paths the frontend already
uses (``/api/config``, ``/api/register``, ``/api/access/...``,
``/api/admin/...``).  ``main.create_app`` mounts this router at
``/api``.
"""

from fastapi import APIRouter

from .endpoints import access, admin, pilots

router = APIRouter()

router.include_router(pilots.router, tags=["pilots"])
router.include_router(access.router, prefix="/access", tags=["access"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
