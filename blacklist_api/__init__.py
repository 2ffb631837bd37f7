"""
Top‑level package for the BlackList RO registry API.

All functionality lives in submodules under ``app``; the application
itself is importable as ``blacklist_api.app.main:app``.
"""

__all__ = []
