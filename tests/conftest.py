"""Root-level pytest configuration and shared fixtures.

Adds the src/ directory to sys.path so bundlekeeper can be imported without
installation. Provides bundle definitions, mock collaborators and pytest
fixtures used across all test suites.

Key exports:
    - make_bundle: bundle with sensitive and plain parameters/outputs
    - Mock factory functions (make_bundle_metadata, make_secret_store, ...)
    - Pytest fixtures for every collaborator
"""

import sys
from pathlib import Path
from typing import Iterable, Optional
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bundlekeeper.bundle import Bundle, BundleMetadata, ExtendedBundle  # noqa: E402
from bundlekeeper.parameters import (  # noqa: E402
    ParameterProvider,
    SecretParameterProvider,
)
from bundlekeeper.secrets import InMemorySecretStore, SecretStore  # noqa: E402
from bundlekeeper.service import SanitizerService  # noqa: E402

RUN_ID = "01HRUN00000000000000000000"

# ---------------------------------------------------------------------------
# Bundle definitions
# ---------------------------------------------------------------------------


def make_bundle() -> Bundle:
    """Build a bundle declaring sensitive and plain parameters and outputs.

    Returns:
        Bundle with parameters username, password, port, debug, config and
        tags; outputs kubeconfig (sensitive) and endpoint; custom actions
        docs (stateless, read-only), dry-run (stateful, read-only) and
        migrate (modifying).
    """
    return Bundle.model_validate(
        {
            "schemaVersion": "v1.2.0",
            "name": "wordpress",
            "version": "0.1.0",
            "parameters": {
                "username": {"type": "string"},
                "password": {"type": "string", "writeOnly": True},
                "port": {"type": "integer", "default": 8080},
                "debug": {"type": "boolean"},
                "config": {"type": "object"},
                "tags": {"type": "array"},
            },
            "outputs": {
                "kubeconfig": {"type": "string", "writeOnly": True},
                "endpoint": {"type": "string"},
            },
            "actions": {
                "docs": {"modifies": False, "stateless": True},
                "dry-run": {"modifies": False, "stateless": False},
                "migrate": {"modifies": True, "stateless": False},
            },
        }
    )


# ---------------------------------------------------------------------------
# Mock collaborator factories
# ---------------------------------------------------------------------------


def make_bundle_metadata(sensitive: Iterable[str] = ()) -> MagicMock:
    """Build a mock BundleMetadata reporting the given names as sensitive.

    Conversion calls return their input unchanged.

    Args:
        sensitive: Parameter and output names reported as sensitive.

    Returns:
        Configured MagicMock implementing the BundleMetadata interface.
    """
    sensitive = set(sensitive)
    metadata = MagicMock(spec=BundleMetadata)
    metadata.is_sensitive_parameter.side_effect = lambda name: name in sensitive
    metadata.is_output_sensitive.side_effect = lambda name: name in sensitive
    metadata.write_parameter_to_string.side_effect = lambda name, value: str(value)
    metadata.convert_parameter_value.side_effect = lambda name, raw: raw
    return metadata


def make_secret_store(create_error: Optional[Exception] = None) -> MagicMock:
    """Build a mock SecretStore.

    Args:
        create_error: Exception raised by every create() call.

    Returns:
        Configured MagicMock implementing the SecretStore interface.
    """
    store = MagicMock(spec=SecretStore)
    store.name = "mock secret store"
    if create_error is not None:
        store.create.side_effect = create_error
    return store


def make_parameter_provider(resolved: Optional[dict] = None) -> MagicMock:
    """Build a mock ParameterProvider.

    Args:
        resolved: Return value of resolve_all().

    Returns:
        Configured MagicMock implementing the ParameterProvider interface.
    """
    provider = MagicMock(spec=ParameterProvider)
    provider.resolve_all.return_value = dict(resolved or {})
    return provider


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def run_id() -> str:
    """Provide a fixed run ID."""
    return RUN_ID


@pytest.fixture
def bundle() -> Bundle:
    """Provide the test bundle definition."""
    return make_bundle()


@pytest.fixture
def bundle_metadata(bundle: Bundle) -> ExtendedBundle:
    """Provide metadata backed by the test bundle."""
    return ExtendedBundle(bundle)


@pytest.fixture
def secret_store() -> InMemorySecretStore:
    """Provide an empty in-memory secret store."""
    return InMemorySecretStore()


@pytest.fixture
def parameter_provider(secret_store: InMemorySecretStore) -> SecretParameterProvider:
    """Provide a parameter provider reading from the in-memory store."""
    return SecretParameterProvider(secret_store)


@pytest.fixture
def sanitizer(
    parameter_provider: SecretParameterProvider,
    secret_store: InMemorySecretStore,
) -> SanitizerService:
    """Provide a sanitizer wired to the in-memory store."""
    return SanitizerService(
        parameter_provider=parameter_provider,
        secret_store=secret_store,
    )


@pytest.fixture
def mock_secret_store() -> MagicMock:
    """Provide a mock SecretStore."""
    return make_secret_store()
