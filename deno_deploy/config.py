"""Engine configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file without clobbering variables already exported
load_dotenv(override=False)


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Deno Deploy API
    deno_deploy_token: str = Field(default="")
    deno_deploy_organization_id: str = Field(default="")
    deno_deploy_endpoint: str = "https://api.deno.com/v1"

    # Timeouts
    # Build log retrieval blocks until the build finishes
    http_timeout_seconds: float = Field(default=300.0, gt=0)
    create_timeout_seconds: float = Field(default=1200.0, gt=0)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"
    log_file: str | None = None

    @property
    def has_credentials(self) -> bool:
        """Check if an access token and organization are configured."""
        return bool(self.deno_deploy_token and self.deno_deploy_organization_id)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
