"""Unit tests for building stores and the sanitizer from settings."""

import logging
from unittest.mock import patch

import pytest

from bundlekeeper.config import AppSettings
from bundlekeeper.exception import ConfigurationError
from bundlekeeper.factory import (
    create_sanitizer,
    create_secret_store,
    create_secrets_backend,
)
from bundlekeeper.secrets import (
    FileSystemSecretStore,
    HostSecretStore,
    InMemorySecretStore,
    RoutingSecretStore,
    SourceKind,
)
from bundlekeeper.service import SanitizerService


class TestCreateSecretsBackend:
    """Tests for create_secrets_backend()."""

    def test_memory_backend(self) -> None:
        backend = create_secrets_backend(AppSettings(secret_backend="memory"))

        assert isinstance(backend, InMemorySecretStore)

    def test_filesystem_backend(self, tmp_path) -> None:
        backend = create_secrets_backend(
            AppSettings(secret_backend="filesystem", secrets_dir=tmp_path)
        )

        assert isinstance(backend, FileSystemSecretStore)
        assert backend.directory == tmp_path

    def test_unknown_backend(self) -> None:
        with pytest.raises(ConfigurationError, match="vault"):
            create_secrets_backend(AppSettings(secret_backend="vault"))


class TestCreateSecretStore:
    """Tests for create_secret_store()."""

    def test_routes_to_backend_and_host(self) -> None:
        store = create_secret_store(AppSettings(command_timeout=7))

        assert isinstance(store, RoutingSecretStore)
        assert isinstance(store.secrets, InMemorySecretStore)
        assert isinstance(store.host, HostSecretStore)
        assert store.host.command_timeout == 7

    def test_invalid_settings_raise(self) -> None:
        """Every validation problem is reported in one error."""
        with pytest.raises(ConfigurationError) as exc_info:
            create_secret_store(AppSettings(secret_backend="vault", command_timeout=0))

        assert len(exc_info.value.details["errors"]) == 2

    def test_production_problems_are_logged(self, caplog) -> None:
        settings = AppSettings(environment="production", secret_backend="memory")

        with caplog.at_level(logging.WARNING, logger="bundlekeeper.factory"):
            create_secret_store(settings)

        assert "loses sensitive values on restart" in caplog.text


class TestCreateSanitizer:
    """Tests for create_sanitizer()."""

    def test_uses_given_store_for_both_directions(self) -> None:
        """Values written by the sanitizer are resolved through the same store."""
        store = InMemorySecretStore()

        sanitizer = create_sanitizer(secret_store=store)

        assert isinstance(sanitizer, SanitizerService)
        assert sanitizer.secret_store is store
        assert sanitizer.parameter_provider.secrets is store

    def test_builds_store_from_settings(self) -> None:
        sanitizer = create_sanitizer(AppSettings(secret_backend="memory"))

        sanitizer.secret_store.create(SourceKind.SECRET, "key", "value")

        assert sanitizer.parameter_provider.secrets.resolve("secret", "key") == "value"

    def test_defaults_to_global_settings(self) -> None:
        with patch(
            "bundlekeeper.factory.get_settings", return_value=AppSettings()
        ) as mock_get_settings:
            create_sanitizer()

        mock_get_settings.assert_called_once_with()
