from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Product Catalog API"
    ENVIRONMENT: str = "local"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./catalog.db"
    DATABASE_NAME: Optional[str] = None
    QUERY_TIMEOUT_SECONDS: float = 10.0
    QUERY_WORKERS: int = 4

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    LOG_SQL: bool = False

    # ==============================
    # HTTP
    # ==============================
    CORS_ORIGINS: str = "*"

    # ==============================
    # Catalog queries
    # ==============================
    DEFAULT_PAGE_LIMIT: int = 20
    DEPARTMENT_PAGE_LIMIT: int = 12
    MAX_PAGE_LIMIT: int = 100
    STRICT_DEPARTMENT_FILTER: bool = False

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
