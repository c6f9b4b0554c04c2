"""Configuration module for the quotaguard backend.

Provides centralized configuration management with type-safe enums.

Usage:
    from quotaguard.core.config import settings, Environment

    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from quotaguard.core.config.enums import Environment, LogFormat
from quotaguard.core.config.settings import Settings

__all__ = [
    "Settings",
    "Environment",
    "LogFormat",
    "settings",
]

# Singleton settings instance
settings = Settings()
