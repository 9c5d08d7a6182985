"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Zendesk Help Center
    zendesk_subdomain: str = Field(default="", description="Zendesk subdomain, e.g. 'acme'")
    zendesk_email: str = Field(default="", description="Agent email used for API token auth")
    zendesk_api_token: str = Field(default="", description="Zendesk API token")
    zendesk_locale: str = Field(default="en-us", description="Help center locale")

    # Docusaurus documentation site
    docs_base_url: str = Field(
        default="https://help.getmaintainx.com",
        description="Host serving /search-index.json",
    )

    source_timeout: float = Field(default=5.0, description="Per-source HTTP timeout in seconds")

    # Application Configuration
    api_key: str = Field(default="dev-key-12345", description="Bearer key for /api/ routes")
    environment: str = Field(default="production", description="development or production")
    app_title: str = Field(default="MXchatbot Unified Search API", description="Application title")
    app_version: str = Field(default="1.0.0", description="Application version")
    service_name: str = Field(default="MXchatbot Unified Search", description="Health check name")
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3001, description="Bind port")
    allowed_origins: str = Field(default="*", description="Comma-separated CORS origins")

    # Rate limiting (per client IP, fixed window)
    rate_limit_requests: int = Field(default=100, description="Requests allowed per window")
    rate_limit_window_seconds: int = Field(default=900, description="Window length in seconds")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(default=True, description="Use JSON log format")
    log_file: str | None = Field(default=None, description="Optional log file path")

    @property
    def zendesk_base_url(self) -> str:
        return f"https://{self.zendesk_subdomain}.zendesk.com/api/v2"

    @property
    def zendesk_configured(self) -> bool:
        return bool(self.zendesk_subdomain)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
