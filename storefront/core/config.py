"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables (or a .env file in local development).

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Token lifetimes and limits live here, not in the token services

Usage:
    from storefront.core.config import settings

    ttl = settings.download_token_ttl
    if settings.is_production:
        ...
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront.core.enums import Environment


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. .env file (local development)
        3. Default values (only for non-sensitive config)
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )

    # Core application settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, detailed errors)",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Server bind host",
    )
    port: int = Field(
        default=3000,
        description="Server bind port",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="RecipeRush Storefront",
        description="Application name",
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version",
    )
    base_url: str = Field(
        default="http://localhost:3000",
        description="Public base URL used for download links and checkout return pages",
    )

    # CORS configuration
    cors_origins: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)",
    )

    # Payment provider (Stripe)
    stripe_secret_key: str | None = Field(
        default=None,
        description="Stripe secret API key (server side only)",
    )
    stripe_publishable_key: str | None = Field(
        default=None,
        description="Stripe publishable key handed to the browser",
    )
    stripe_webhook_secret: str | None = Field(
        default=None,
        description="Signing secret for the Stripe webhook endpoint",
    )
    currency: str = Field(
        default="gbp",
        description="ISO 4217 currency code for checkout line items (lowercase)",
    )
    product_name: str = Field(
        default="RecipeRush Complete Recipe Collection",
        description="Product name used in delivery emails",
    )
    product_description: str = Field(
        default="Digital Recipe Collection",
        description="Line item description shown on the hosted checkout page",
    )

    # CSRF tokens
    csrf_token_ttl_minutes: int = Field(
        default=15,
        description="CSRF token lifetime in minutes",
    )

    # Download tokens
    download_token_max_uses: int = Field(
        default=5,
        description="Maximum successful downloads per download token",
    )
    download_token_ttl_days_production: int = Field(
        default=7,
        description="Download token lifetime in days (production)",
    )
    download_token_ttl_days_development: int = Field(
        default=30,
        description="Download token lifetime in days (every other environment)",
    )
    token_sweep_interval_seconds: float = Field(
        default=300.0,
        description="Interval between expired-token sweeps",
    )

    # Artifact (the purchased file)
    artifact_path: str = Field(
        default="ebooks/complete-recipe-collection.pdf",
        description="Filesystem path of the purchased artifact",
    )
    artifact_download_name: str = Field(
        default="RecipeRush-Complete-Recipe-Collection.pdf",
        description="Filename offered to the browser for the artifact",
    )

    # Rate limits (requests per minute per client IP)
    csrf_rate_limit_per_minute: int = Field(
        default=30,
        description="CSRF token issuance limit per client IP",
    )
    checkout_rate_limit_per_minute: int = Field(
        default=10,
        description="Checkout session creation limit per client IP",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """
        Remove trailing slashes from URLs.

        Args:
            v: URL string.

        Returns:
            str: URL without trailing slash.
        """
        return v.rstrip("/")

    @field_validator(
        "csrf_token_ttl_minutes",
        "download_token_max_uses",
        "download_token_ttl_days_production",
        "download_token_ttl_days_development",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """
        Reject zero or negative token lifetimes and limits.

        Args:
            v: Configured value.

        Returns:
            int: Validated value.

        Raises:
            ValueError: If value is not positive.
        """
        if v <= 0:
            raise ValueError("token lifetimes and limits must be positive")
        return v

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def csrf_token_ttl(self) -> timedelta:
        """CSRF token lifetime."""
        return timedelta(minutes=self.csrf_token_ttl_minutes)

    @property
    def download_token_ttl(self) -> timedelta:
        """
        Download token lifetime for the current environment.

        Returns:
            timedelta: 7 days in production, 30 days elsewhere (defaults).
        """
        if self.is_production:
            return timedelta(days=self.download_token_ttl_days_production)
        return timedelta(days=self.download_token_ttl_days_development)

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """True if environment is DEVELOPMENT."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """True if environment is TESTING."""
        return self.environment == Environment.TESTING

    @property
    def is_ci(self) -> bool:
        """True if environment is CI."""
        return self.environment == Environment.CI

    @property
    def is_production(self) -> bool:
        """True if environment is PRODUCTION."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()


# Global settings instance (singleton pattern)
settings = get_settings()
