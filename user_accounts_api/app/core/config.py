"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  In a
production deployment you should override these via environment
variables or a dedicated configuration service.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "User Accounts API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    api_prefix: str = os.getenv("API_PREFIX", "/api/v1")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Which ``UserRepository`` implementation backs the API: ``sqlite``
    # (persistent) or ``memory`` (process‑local, lost on restart).
    storage_backend: str = os.getenv("STORAGE_BACKEND", "sqlite").lower()

    # Path to the SQLite database file.  If a relative path is provided,
    # it is resolved relative to the package root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "user_accounts.db")

    # PBKDF2 work factor for newly hashed passwords.  Each hash records
    # its own count, so raising this keeps existing passwords valid.
    password_hash_iterations: int = int(os.getenv("PASSWORD_HASH_ITERATIONS", "100000"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
