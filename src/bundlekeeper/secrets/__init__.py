"""Secret indirection and secret store backends.

Exports the strategy model (Strategy, Source, SourceKind and the helpers that
build and encode strategies) and the SecretStore interface with its
in-memory, filesystem, host and routing implementations.
"""

from bundlekeeper.secrets.filesystem_store import FileSystemSecretStore
from bundlekeeper.secrets.host_store import HostSecretStore
from bundlekeeper.secrets.memory_store import InMemorySecretStore
from bundlekeeper.secrets.routing_store import RoutingSecretStore
from bundlekeeper.secrets.store import SecretStore
from bundlekeeper.secrets.strategy import (
    Source,
    SourceKind,
    Strategy,
    default_strategy,
    encode_secret,
    secret_key,
    value_strategy,
)

__all__ = [
    "FileSystemSecretStore",
    "HostSecretStore",
    "InMemorySecretStore",
    "RoutingSecretStore",
    "SecretStore",
    "Source",
    "SourceKind",
    "Strategy",
    "default_strategy",
    "encode_secret",
    "secret_key",
    "value_strategy",
]
