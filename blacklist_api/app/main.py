"""
Main entrypoint for the BlackList RO registry API.

This module assembles the FastAPI application: logging, the
in‑memory registry, error handlers, middleware, the API router and
the optional static frontend.  ``create_app`` builds and configures
the app, which is then instantiated at module import time as ``app``
so it can be served directly, e.g.::

    uvicorn blacklist_api.app.main:app --port 4000
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.errors import RegistryError
from .core.logging_config import setup_logging
from .core.state import RegistryState
from .services.registry_service import RegistryService

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


class FrontendFiles(StaticFiles):
    """Static files with a single‑page‑app fallback.

    Unknown paths outside ``/api`` are answered with ``index.html`` so
    that client‑side routes such as ``/admin`` load the frontend.
    """

    async def get_response(self, path: str, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != status.HTTP_404_NOT_FOUND or path.split("/", 1)[0] == "api":
                raise
            return await super().get_response("index.html", scope)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Each call builds a fresh ``RegistryState``, so two applications
    never share pilots, tokens or access codes.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module‑level settings
        read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    state = RegistryState(
        public_mode=settings.public_mode,
        min_public_signups=settings.min_public_signups,
    )
    app.state.settings = settings
    app.state.registry = RegistryService(
        state,
        admin_password=settings.admin_password,
        admin_token_ttl_minutes=settings.admin_token_ttl_minutes,
    )

    @app.exception_handler(RegistryError)
    async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed JSON or wrongly typed fields; report them like any
        # other invalid input.
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return _error(status.HTTP_400_BAD_REQUEST, message)

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > settings.max_body_bytes:
            return _error(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, "Payload too large")
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    # The frontend is mounted last so that it never shadows API routes.
    static_dir = Path(settings.static_dir)
    if settings.static_dir and static_dir.is_dir():
        app.mount("/", FrontendFiles(directory=static_dir, html=True), name="frontend")
        logger.info("Serving frontend from %s", static_dir.resolve())

    logger.info(
        "Registry ready: public_mode=%s, min_public_signups=%d",
        settings.public_mode,
        settings.min_public_signups,
    )
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it via ``blacklist_api.app.main:app``.
app = create_app()
