"""Secret store interface.

A secret store persists plaintext secret material addressed by a
(kind, key) pair. The sanitization layer never caches what it reads from a
store and never retries a failed call; both belong to the backend or to the
orchestrator calling this library.
"""

from abc import ABC, abstractmethod
from typing import Union

from bundlekeeper.secrets.strategy import SourceKind


class SecretStore(ABC):
    """Abstract key-addressed plaintext secret persistence.

    Backends must reject a second ``create`` for a (kind, key) pair that
    already holds a value by raising SecretAlreadyExistsError. Keys are
    derived from unique run IDs, so a duplicate always means the same run
    sanitized the same value twice.
    """

    name = "secret store"

    @abstractmethod
    def create(self, kind: Union[SourceKind, str], key: str, value: str) -> None:
        """Store a plaintext value.

        Args:
            kind: Source kind the key belongs to
            key: Lookup key
            value: Plaintext value

        Raises:
            StoreError: If the backend cannot store the value
        """
        pass

    @abstractmethod
    def resolve(self, kind: Union[SourceKind, str], key: str) -> str:
        """Read a plaintext value.

        Args:
            kind: Source kind the key belongs to
            key: Lookup key

        Returns:
            Plaintext value

        Raises:
            SecretNotFoundError: If nothing is stored under the key
            StoreError: If the backend lookup fails
        """
        pass


def kind_name(kind: Union[SourceKind, str]) -> str:
    """Normalize a source kind to its string form."""
    return kind.value if isinstance(kind, SourceKind) else str(kind)
