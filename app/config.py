"""
Todo API application settings.

Extends the base settings with application-specific configuration.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Todo API settings."""

    # ==========================================================================
    # API Settings
    # ==========================================================================
    # Every router is mounted under this versioned prefix
    API_PREFIX: str = "/api/v1"
    API_TITLE: str = "Full Stack To-Do REST API"
    API_VERSION: str = "1.0.0"


# Global settings instance
settings = Settings()
