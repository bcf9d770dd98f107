"""
Configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
server starts with the flat-file backend in the current directory.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Money Transfer API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    # Routes are served from the root unless a prefix such as ``/api/v1`` is set.
    api_prefix: str = os.getenv("API_PREFIX", "")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Either ``file`` (JSON snapshots in ``data_dir``) or ``mongo``.
    storage_backend: str = os.getenv("STORAGE_BACKEND", "file")
    data_dir: str = os.getenv("DATA_DIR", ".")

    # Admins are static seed data.  ``ADMINS_JSON`` holds a JSON array and
    # takes precedence over ``ADMIN_FILE``.  A relative admin file is
    # resolved against ``data_dir``.
    admin_file: str = os.getenv("ADMIN_FILE", "admin.json")
    admins_json: Optional[str] = os.getenv("ADMINS_JSON") or None

    mongo_url: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
    mongo_db_name: str = os.getenv("MONGO_DB_NAME", "money_transfer")

    # Partner service notified when a business account registers.
    business_service_url: str = os.getenv("BUSINESS_SERVICE_URL", "http://localhost:5002")
    business_service_timeout: float = float(os.getenv("BUSINESS_SERVICE_TIMEOUT", "10"))

    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "http://localhost:3000"))
    )
    max_body_bytes: int = int(os.getenv("MAX_BODY_BYTES", str(10 * 1024 * 1024)))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before this module is imported.
settings = Settings()
