"""Configuration management using pydantic-settings."""

from datetime import timedelta

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils import durations


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/easysearch.db"
    api_v1_prefix: str = "/api/v1"
    cors_origins: list[str] = ["http://localhost:3000"]
    port: int = 3000

    # "production" hides internal error messages from API responses
    environment: str = "development"
    log_level: str = "INFO"

    # JWT Configuration
    # Access and refresh tokens are signed with independent secrets
    jwt_access_secret: str = "change-me-access-secret-use-env-var"
    jwt_access_expires_in: timedelta = timedelta(minutes=15)
    jwt_refresh_secret: str = "change-me-refresh-secret-use-env-var"
    jwt_refresh_expires_in: timedelta = timedelta(days=7)
    jwt_algorithm: str = "HS256"

    # Security Configuration
    # For testing: bypass localhost-only checks (e.g., admin creation)
    bypass_localhost_check: bool = False

    # Bcrypt work factor (higher = more secure but slower)
    # For tests, use 4 for faster execution while maintaining functionality
    bcrypt_work_factor: int = 12

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )

    @field_validator("jwt_access_expires_in", "jwt_refresh_expires_in", mode="before")
    @classmethod
    def parse_expires_in(cls, v):
        """Accept "15m" / "7d" style shorthands alongside seconds and ISO 8601."""
        return durations.parse_duration(v)

    @field_validator("bcrypt_work_factor")
    @classmethod
    def check_work_factor(cls, v: int) -> int:
        """Bcrypt only accepts log rounds between 4 and 31."""
        if not 4 <= v <= 31:
            raise ValueError("bcrypt_work_factor must be between 4 and 31")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()
