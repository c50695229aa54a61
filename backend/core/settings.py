"""
Centralized application settings using Pydantic BaseSettings.

This module provides type-safe access to environment variables with validation.
All settings are loaded once at application startup.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

# ============================================================================
# Game Constants
# ============================================================================

# Armor class can never be raised above this value by equipping gear
AC_CAP = 1000

# Character defaults when a create request omits them
DEFAULT_HP = 2000
DEFAULT_AC = 0

# Wizard defaults when a create request omits them
DEFAULT_MANA = 1000
DEFAULT_MAX_MANA = 1000


def _parse_bool(v, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "yes", "on"}
    return default


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults and are validated on startup.
    """

    # Database
    database_url: str = "sqlite+aiosqlite:///./guildhall.db"

    # Authentication
    jwt_secret: Optional[str] = None
    jwt_expiration_hours: int = 1
    auth_enabled: bool = True

    # CORS configuration
    frontend_url: Optional[str] = None

    # Debug configuration
    debug: bool = False

    @field_validator("auth_enabled", mode="before")
    @classmethod
    def validate_auth_enabled(cls, v: Optional[str]) -> bool:
        """Parse auth_enabled from string to bool."""
        return _parse_bool(v, True)

    @field_validator("debug", mode="before")
    @classmethod
    def validate_debug(cls, v: Optional[str]) -> bool:
        """Parse debug from string to bool."""
        return _parse_bool(v, False)

    @field_validator("jwt_expiration_hours")
    @classmethod
    def validate_jwt_expiration_hours(cls, v: int) -> int:
        if v <= 0:
            from domain.exceptions import ConfigurationError

            raise ConfigurationError("JWT_EXPIRATION_HOURS must be positive")
        return v

    @property
    def backend_dir(self) -> Path:
        """Directory containing the backend packages."""
        return Path(__file__).parent.parent

    @property
    def project_root(self) -> Path:
        """Parent of backend/, where the .env file lives."""
        return self.backend_dir.parent

    def get_cors_origins(self) -> List[str]:
        """
        Get the list of allowed CORS origins.

        Returns:
            List of allowed origin URLs
        """
        origins = [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]
        if self.frontend_url:
            origins.append(self.frontend_url)
        return origins

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()

        # Prefer the project-root .env over the working directory one
        env_path = _settings.project_root / ".env"
        if env_path.exists():
            _settings = Settings(_env_file=str(env_path))

    return _settings


def reset_settings() -> None:
    """
    Reset the settings singleton (useful for testing).
    """
    global _settings
    _settings = None
