"""
Endpoint modules, one APIRouter per area (pilots, access, admin).
They are aggregated in ``api/router.py``.
"""
