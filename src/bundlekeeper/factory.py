"""Construction of secret stores and the sanitizer service from settings."""

import logging
from typing import Optional

from bundlekeeper.config.app_settings import AppSettings, get_settings
from bundlekeeper.constants import SECRET_BACKEND_FILESYSTEM, SECRET_BACKEND_MEMORY
from bundlekeeper.exception import ConfigurationError
from bundlekeeper.parameters.provider import SecretParameterProvider
from bundlekeeper.secrets.filesystem_store import FileSystemSecretStore
from bundlekeeper.secrets.host_store import HostSecretStore
from bundlekeeper.secrets.memory_store import InMemorySecretStore
from bundlekeeper.secrets.routing_store import RoutingSecretStore
from bundlekeeper.secrets.store import SecretStore
from bundlekeeper.service.sanitizer_service import SanitizerService

logger = logging.getLogger(__name__)


def create_secrets_backend(app_settings: AppSettings) -> SecretStore:
    """Create the backend holding values written by the sanitizer.

    Args:
        app_settings: Application settings

    Returns:
        Secret store for secret sources

    Raises:
        ConfigurationError: If the configured backend is unknown
    """
    if app_settings.secret_backend == SECRET_BACKEND_MEMORY:
        return InMemorySecretStore()
    if app_settings.secret_backend == SECRET_BACKEND_FILESYSTEM:
        return FileSystemSecretStore(app_settings.secrets_dir)
    raise ConfigurationError(
        f"Unknown secret backend: {app_settings.secret_backend}",
        details={"secret_backend": app_settings.secret_backend},
    )


def create_secret_store(app_settings: AppSettings) -> SecretStore:
    """Create the store used to resolve every source kind.

    Args:
        app_settings: Application settings

    Returns:
        Store routing secret sources to the backend and the rest to the host
    """
    errors = app_settings.validate_backend()
    if errors:
        raise ConfigurationError("; ".join(errors), details={"errors": errors})

    if app_settings.is_production():
        for problem in app_settings.validate_production_config():
            logger.warning(f"Production configuration: {problem}")

    store = RoutingSecretStore(
        secrets=create_secrets_backend(app_settings),
        host=HostSecretStore(command_timeout=app_settings.command_timeout),
    )
    logger.info(f"Secret store initialized with {app_settings.secret_backend} backend")
    return store


def create_sanitizer(
    app_settings: Optional[AppSettings] = None,
    secret_store: Optional[SecretStore] = None,
) -> SanitizerService:
    """Create a sanitizer service.

    Args:
        app_settings: Application settings (defaults to get_settings())
        secret_store: Existing store to use instead of building one

    Returns:
        SanitizerService sharing one store between sanitizing and resolving
    """
    if secret_store is None:
        secret_store = create_secret_store(app_settings or get_settings())

    return SanitizerService(
        parameter_provider=SecretParameterProvider(secret_store),
        secret_store=secret_store,
    )
