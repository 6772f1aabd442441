"""Configuration management for bundlekeeper.

Provides settings loaded from environment variables (AppSettings) and the
logging setup derived from them.
"""

from .app_settings import AppSettings, configure_logging, get_settings

__all__ = [
    "AppSettings",
    "configure_logging",
    "get_settings",
]
