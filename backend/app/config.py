"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.database.databases import products_db, users_employees_db


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB URIs per logical database
    mongo_client_uri: Optional[str] = Field(default=None, description="URI for ProductsDB")
    mongo_server_uri: Optional[str] = Field(default=None, description="URI for UsersEmployeesDB")
    database_uris: dict[str, str] = Field(
        default_factory=dict,
        description="Extra logical database name -> URI entries (JSON)",
    )
    server_selection_timeout_ms: int = Field(default=5000, gt=0)

    # Startup
    warmup_on_startup: bool = True

    # Server
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    def database_uri_map(self) -> dict[str, str]:
        """
        Build the logical database name -> connection URI mapping.

        Names whose URI is not set are left out, so asking for them later
        fails instead of falling back to some default endpoint.
        """
        uri_map: dict[str, str] = {}
        if self.mongo_client_uri:
            uri_map[products_db.DB_NAME] = self.mongo_client_uri
        if self.mongo_server_uri:
            uri_map[users_employees_db.DB_NAME] = self.mongo_server_uri
        uri_map.update(self.database_uris)
        return uri_map


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
