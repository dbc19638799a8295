"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; CivicOS/1.0; +https://civicos.ca)"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str = Field(
        description="PostgreSQL async connection string (postgresql+asyncpg://...)",
    )

    # JWT
    jwt_secret_key: str = Field(
        min_length=32,
        validation_alias=AliasChoices("jwt_secret_key", "session_secret"),
        description="Secret key for signing JWTs (minimum 32 characters); SESSION_SECRET is accepted as well",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_access_token_expire_minutes: int = Field(
        default=60,
        description="Access token expiration in minutes",
        gt=0,
    )

    # Scraping
    scraper_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header sent with every scrape request",
    )
    scraper_timeout: float = Field(
        default=15.0,
        description="Per-request timeout for scrape requests in seconds",
        gt=0,
    )
    scraper_retries: int = Field(
        default=1,
        description="Extra attempts after a timeout, transport error or 5xx response",
        ge=0,
        le=5,
    )
    scraper_retry_delay: float = Field(
        default=1.0,
        description="Fixed delay between scrape attempts in seconds",
        ge=0,
    )

    # Scheduled ingestion
    ingestion_refresh_enabled: bool = Field(
        default=False,
        description="Run the full ingestion pipeline on a schedule inside the API process",
    )
    ingestion_refresh_interval: int = Field(
        default=6 * 60 * 60,
        description="Seconds between scheduled ingestion runs",
        ge=60,
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins (must be explicitly configured)",
    )
    cors_origin_regex: str = Field(
        default="",
        description="Regex pattern for allowed CORS origins",
    )

    # API
    api_prefix: str = Field(
        default="/api",
        description="Prefix for every API route",
    )
    rate_limit_per_minute: int = Field(
        default=200,
        description="Maximum API requests per minute per IP address",
        gt=0,
    )
    trusted_proxy_headers: str = Field(
        default="CF-Connecting-IP,X-Forwarded-For,X-Real-IP",
        description="Comma-separated list of HTTP headers to check for real client IP, in priority order",
    )

    @property
    def trusted_proxy_header_list(self) -> list[str]:
        """Parse trusted proxy headers string into a list."""
        if not self.trusted_proxy_headers.strip():
            return []
        return [h.strip() for h in self.trusted_proxy_headers.split(",") if h.strip()]

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]
