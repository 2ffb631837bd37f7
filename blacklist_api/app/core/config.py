"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration; in a real deployment at
least ``ADMIN_PASSWORD`` must be overridden.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "BlackList RO API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))

    # Shared password for the admin panel.  It is read once at startup
    # and cannot be rotated while the process is running.
    admin_password: str = field(default_factory=lambda: os.getenv("ADMIN_PASSWORD", "change-me"))

    # Initial value of the privacy switch.  Administrators may flip it at
    # runtime, but only once at least ``min_public_signups`` pilots have
    # registered; below that threshold the listing is always public.
    public_mode: bool = field(default_factory=lambda: _env_bool("PUBLIC_MODE", "true"))
    min_public_signups: int = field(default_factory=lambda: int(os.getenv("MIN_PUBLIC_SIGNUPS", "15")))

    # Lifetime of admin tokens in minutes.  ``0`` keeps tokens valid until
    # the process restarts or the admin logs out.
    admin_token_ttl_minutes: int = field(default_factory=lambda: int(os.getenv("ADMIN_TOKEN_TTL_MINUTES", "0")))

    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "4000")))

    # Comma‑separated list of origins allowed by CORS.  ``*`` allows all.
    cors_origins: str = field(default_factory=lambda: os.getenv("CORS_ORIGINS", "*"))
    max_body_bytes: int = field(default_factory=lambda: int(os.getenv("MAX_BODY_BYTES", str(2 * 1024 * 1024))))

    # Directory with the frontend build.  If it does not exist the API is
    # served alone.  Relative paths are resolved against the working
    # directory.
    static_dir: str = field(default_factory=lambda: os.getenv("STATIC_DIR", "public"))

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module; tests build their own
# ``Settings`` instances instead.
settings = Settings()
