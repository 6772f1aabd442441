"""Library configuration from environment variables.

This module provides the AppSettings class which loads configuration for the
sanitization layer from environment variables at startup: logging, which
secret backend holds sensitive values, and how host sources are resolved.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bundlekeeper.constants import (
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_SECRETS_DIR,
    ENV_DEVELOPMENT,
    ENV_PRODUCTION,
    SECRET_BACKEND_FILESYSTEM,
    SECRET_BACKEND_MEMORY,
)

TEXT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppSettings(BaseSettings):
    """Static configuration loaded from environment variables.

    All settings can be overridden via environment variables with the
    BUNDLEKEEPER_ prefix. For example, secret_backend can be set via
    BUNDLEKEEPER_SECRET_BACKEND.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json or text)
        environment: Deployment environment (development, staging, production)
        debug: Enable debug mode
        secret_backend: Backend holding sensitive values (memory or filesystem)
        secrets_dir: Directory used by the filesystem secret backend
        command_timeout: Seconds allowed for a command source to produce a value
        default_namespace: Namespace used when a caller does not pass one
    """

    model_config = SettingsConfigDict(
        env_prefix="BUNDLEKEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text")

    environment: str = Field(default=ENV_DEVELOPMENT)
    debug: bool = Field(default=False)

    secret_backend: str = Field(default=SECRET_BACKEND_MEMORY)
    secrets_dir: Path = Field(default=Path(DEFAULT_SECRETS_DIR))
    command_timeout: int = Field(default=DEFAULT_COMMAND_TIMEOUT)

    default_namespace: str = Field(default="")

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == ENV_PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == ENV_DEVELOPMENT

    def validate_production_config(self) -> list[str]:
        """Validate configuration for production deployment.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if self.secret_backend == SECRET_BACKEND_MEMORY:
            errors.append(
                "SECRET_BACKEND 'memory' loses sensitive values on restart"
            )

        if self.debug:
            errors.append("DEBUG should be False in production")

        if self.log_level.upper() == "DEBUG":
            errors.append("LOG_LEVEL should not be DEBUG in production")

        return errors

    def validate_backend(self) -> list[str]:
        """Validate the secret backend selection.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []
        if self.secret_backend not in (
            SECRET_BACKEND_MEMORY,
            SECRET_BACKEND_FILESYSTEM,
        ):
            errors.append(f"Unknown SECRET_BACKEND: {self.secret_backend}")
        if self.command_timeout <= 0:
            errors.append("COMMAND_TIMEOUT must be positive")
        return errors


class JsonLogFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(settings: AppSettings) -> None:
    """Install the root log handler described by settings.

    Args:
        settings: Loaded application settings
    """
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    if settings.log_format.lower() == "json":
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonLogFormatter())
        logging.basicConfig(level=level, handlers=[handler], force=True)
    else:
        logging.basicConfig(level=level, format=TEXT_LOG_FORMAT, force=True)


_app_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get singleton instance of static settings.

    Settings are loaded once and cached for application lifetime.

    Returns:
        AppSettings instance
    """
    global _app_settings

    if _app_settings is None:
        _app_settings = AppSettings()

    return _app_settings
