"""
Application package for the pilot registry.

The code is split into ``core`` (configuration, logging, errors,
security helpers and the in‑memory state), ``schemas`` (request and
response models), ``services`` (business logic) and ``api`` (HTTP
routes).  ``main`` wires them together.
"""

from .main import app, create_app  # noqa: F401
