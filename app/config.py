# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.FRONTEND_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in the working directory (if exists)
#
# Empty values are ignored, so `PORT=` behaves the same as an unset PORT.
# =============================================================================

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Reported by the health endpoint
API_VERSION = "1.0.0"

ENV_FILE = ".env"

# Levels understood by both logging and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every setting has a default, so the service starts with no
    configuration at all.
    """

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    # Kept as text: an invalid port only fails when the server binds
    PORT: str = Field(
        default="8080",
        description="Port for the API server"
    )

    HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    # -------------------------------------------------------------------------
    # CORS
    # -------------------------------------------------------------------------

    FRONTEND_URL: str = Field(
        default="http://localhost:5173",
        description="The single origin allowed to make browser requests"
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ...)"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug logging regardless of LOG_LEVEL"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        # Treat empty values as unset so defaults apply
        env_ignore_empty=True,
        case_sensitive=True,
        # Unknown keys in .env (e.g. VITE_* for the frontend) are ignored
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS allow-list (only the configured frontend)."""
        return [self.FRONTEND_URL]

    @property
    def log_level(self) -> str:
        """Effective log level name."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL.upper()

    @property
    def api_base_url(self) -> str:
        """Local URL of the API, used in the startup banner."""
        return f"http://localhost:{self.PORT}/api"


def env_file_exists(path: str = ENV_FILE) -> bool:
    """Check whether the optional .env file is present."""
    return Path(path).is_file()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
