"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
manager works out of the box with a SQLite file next to the project.
"""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Restaurant Reservations")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    log_to_console: bool = _env_bool("LOG_TO_CONSOLE", "true")
    # Comma separated ``module=LEVEL`` overrides, see ``core.logging_config``.
    module_log_levels: str = os.getenv("MODULE_LOG_LEVELS", "")

    # ``sqlite`` keeps data across restarts, ``memory`` is process local.
    storage_backend: str = os.getenv("STORAGE_BACKEND", "sqlite")

    # Path of the SQLite file backing the key-value store.  Relative
    # paths are resolved against the project root by ``core.storage``.
    database_url: str = os.getenv("DATABASE_URL", "reservations.db")

    # When enabled every collection service runs its read-modify-write
    # cycle under an asyncio lock.  Disabling it restores the
    # last-write-wins behaviour of concurrent saves.
    serialize_writes: bool = _env_bool("SERIALIZE_WRITES", "true")

    # How deletes treat dependent records: ``none``, ``restrict`` or
    # ``cascade``.  See ``services.integrity``.
    integrity_policy: str = os.getenv("INTEGRITY_POLICY", "none")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
