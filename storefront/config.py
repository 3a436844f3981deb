"""Application configuration using Pydantic Settings.

Reads configuration from environment variables with sensible defaults.
Credentials for the document store or database should be provided via
environment variables, never committed.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    environment: Literal["prod", "staging", "dev"] = Field(
        default="dev",
        description="Environment name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    store_name: str = Field(
        default="Garutech",
        description="Store name used in order messages",
    )

    # =========================================================================
    # Catalog
    # =========================================================================
    catalog_source: Literal["document_store", "database", "file"] = Field(
        default="document_store",
        description="Where product records are fetched from",
    )
    catalog_file: str = Field(
        default="./data/products.yaml",
        description="Path to a YAML/JSON product file when catalog_source=file",
    )
    taxonomy_path: str | None = Field(
        default=None,
        description="Path to a taxonomy YAML file (packaged default when unset)",
    )
    catalog_refresh_interval_seconds: float = Field(
        default=0.0,
        ge=0.0,
        description="Periodic refetch interval; 0 disables the refresh loop",
    )

    # =========================================================================
    # Document store (hosted product collection)
    # =========================================================================
    document_store_url: str = Field(
        default="http://localhost:8081",
        description="Base URL of the hosted document store",
    )
    document_store_api_key: str = Field(
        default="",
        description="API key sent as a bearer token (from Secret Manager)",
    )
    document_store_timeout: float = Field(
        default=15.0,
        description="Document store request timeout in seconds",
    )

    # =========================================================================
    # Database (alternative product source)
    # =========================================================================
    db_user: str = Field(
        default="storefront",
        description="Database user",
    )
    db_password: str = Field(
        default="",
        description="Database password",
    )
    db_name: str = Field(
        default="storefront",
        description="Database name",
    )
    db_host: str = Field(
        default="localhost",
        description="Database host",
    )
    db_port: int = Field(
        default=5432,
        description="Database port",
    )
    db_pool_size: int = Field(
        default=5,
        description="Database connection pool size",
    )
    db_pool_max_overflow: int = Field(
        default=10,
        description="Max overflow connections beyond pool size",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Build the async database URL."""
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # =========================================================================
    # Checkout
    # =========================================================================
    checkout_phone_number: str = Field(
        default="2348000000000",
        description="WhatsApp number (international format, digits only) receiving orders",
    )
    currency_symbol: str = Field(
        default="₦",
        description="Currency symbol used in order messages",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Output logs as JSON",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for convenience
settings = get_settings()
