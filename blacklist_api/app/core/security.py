"""
Security helpers: identifier generation, password checks and the
FastAPI dependencies that guard admin routes.

Pilot ids, admin tokens and access codes are all short random strings
drawn from an alphabet without look‑alike characters (no ``0/O`` or
``1/I``), so they can be read aloud or typed from a phone screen.
Randomness comes from ``secrets``.
"""

import hmac
import secrets
from typing import Optional

from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

ID_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ID_LENGTH = 8


def generate_id(length: int = ID_LENGTH) -> str:
    """Return a random identifier of ``length`` characters from ``ID_ALPHABET``."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def check_password(provided: Optional[str], expected: str) -> bool:
    """Compare a submitted password with the configured one.

    Uses a constant‑time comparison.  ``None`` never matches.
    """
    if provided is None:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


security = HTTPBearer(auto_error=False)


def get_registry(request: Request):
    """Dependency returning the ``RegistryService`` bound to the running app."""
    return request.app.state.registry


def get_admin_token(
    x_admin_token: Optional[str] = Header(None),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Extract the admin token from ``x-admin-token`` or a bearer header."""
    if x_admin_token:
        return x_admin_token
    if credentials is not None:
        return credentials.credentials
    return None


def require_admin(
    token: Optional[str] = Depends(get_admin_token),
    registry=Depends(get_registry),
) -> str:
    """Dependency that rejects the request unless the token is a live admin token.

    Raises ``AuthError`` (HTTP 401) otherwise and returns the token on
    success so handlers such as logout can refer to it.
    """
    registry.require_admin(token)
    return token
