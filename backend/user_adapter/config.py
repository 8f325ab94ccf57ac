"""
Adapter configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Adapter settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB
    mongo_uri: Optional[str] = None
    database_name: str = "userbase"
    users_collection: str = "users"
    server_selection_timeout_ms: int = 5000

    # Logging
    log_level: str = "INFO"
    environment: str = "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_options_from_env() -> dict[str, Any]:
    """
    Build a sparse adapter options mapping from the environment.

    Hosts merge their own options over this before resolving them.
    """
    settings = get_settings()
    options: dict[str, Any] = {
        "databaseName": settings.database_name,
        "collectionName": settings.users_collection,
    }
    if settings.mongo_uri:
        options["mongoURI"] = settings.mongo_uri
    return options
