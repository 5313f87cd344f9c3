"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.constants import DEFAULT_LOG_PAGE_SIZE, MAX_PAGE_SIZE


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "User Management"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Database
    database_url: str = "sqlite+aiosqlite:///./user_management.db"
    database_echo: bool = False
    seed_on_startup: bool = True

    # CORS
    cors_origins: list[str] = []

    # API Documentation
    api_docs_base_url: str = "https://api.example.com"

    # Change log
    log_page_size: int = DEFAULT_LOG_PAGE_SIZE

    # Observability
    log_level: str = "INFO"

    @field_validator("log_page_size")
    @classmethod
    def validate_log_page_size(cls, v: int) -> int:
        """Keep the change log page size within sensible bounds.

        Raises:
            ValueError: If the page size is not between 1 and MAX_PAGE_SIZE
        """
        if not 1 <= v <= MAX_PAGE_SIZE:
            raise ValueError(f"LOG_PAGE_SIZE must be between 1 and {MAX_PAGE_SIZE}")
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
