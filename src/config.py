"""Configuration management for the application."""

import logging
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SESSION_SECRET = "change-me-in-production"  # noqa: S105


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./flashdeck.db")

    # Sessions
    session_secret: str = Field(default=DEFAULT_SESSION_SECRET)
    session_algorithm: str = Field(default="HS256")
    session_expiration_minutes: int = Field(default=10080)  # 7 days
    session_cookie_name: str = Field(default="flashdeck.session_token")
    base_url: str = Field(default="http://localhost:8000")

    # Social sign-in (handled by the identity provider, optional)
    google_client_id: str | None = Field(default=None)
    google_client_secret: str | None = Field(default=None)
    github_client_id: str | None = Field(default=None)
    github_client_secret: str | None = Field(default=None)

    # Origins allowed to receive credentialed cross-origin responses
    cors_origins: list[str] = Field(
        default=["https://flash.shgysd.workers.dev", "http://localhost:3000"]
    )

    # Multi-tenant mode. When disabled, todos are served without a session.
    auth_enabled: bool = Field(default=True)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.session_secret == DEFAULT_SESSION_SECRET:
                raise ValueError("SESSION_SECRET must be changed in production")
            if "localhost" in self.database_url:
                raise ValueError("DATABASE_URL should not use localhost in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def secure_cookies(self) -> bool:
        return self.base_url.startswith("https://")

    @property
    def enabled_social_providers(self) -> list[str]:
        """Social providers with both a client id and secret configured."""
        providers = []
        if self.google_client_id and self.google_client_secret:
            providers.append("google")
        if self.github_client_id and self.github_client_secret:
            providers.append("github")
        return providers


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str) -> None:
    """Set up root logging for the API process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
