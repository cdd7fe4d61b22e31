"""Application configuration."""

from functools import lru_cache
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Server
    environment: str = "development"
    debug: bool = True
    log_level: str = "info"

    # Apigee Edge
    apigee_edge_base_url: str = "https://api.enterprise.apigee.com/v1"
    apigee_edge_organization: str
    apigee_edge_username: str
    apigee_edge_password: SecretStr
    apigee_edge_timeout: float = 30.0

    # Developer entity cache
    entity_cache_ttl_seconds: int = 900

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
