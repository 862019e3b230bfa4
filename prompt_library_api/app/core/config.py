"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables so that the service can be configured without
a settings file.  Defaults are provided for all fields and are
suitable for local development; override them via environment
variables in a deployment.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Prompt Library API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  Console logging is always enabled.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database.  A relative path is resolved against
    # the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "prompt_library.db")

    # Seconds a connection waits for a write lock held by another
    # connection before raising ``sqlite3.OperationalError``.
    db_timeout: float = float(os.getenv("DB_TIMEOUT", "10"))

    # Origins allowed to call the API from a browser, e.g. the web UI
    # dev server.  Empty disables the CORS middleware.
    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", ""))
    )


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must therefore be set before this module is imported.
settings = Settings()
