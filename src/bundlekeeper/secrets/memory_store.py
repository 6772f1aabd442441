"""In-memory secret store.

Holds secrets in a process-local dictionary. Values are lost when the process
exits, so this backend is meant for development, tests and short-lived
orchestrators.
"""

import logging
import threading
from typing import Dict, List, Tuple, Union

from bundlekeeper.exception import SecretAlreadyExistsError, SecretNotFoundError
from bundlekeeper.secrets.store import SecretStore, kind_name
from bundlekeeper.secrets.strategy import SourceKind

logger = logging.getLogger(__name__)


class InMemorySecretStore(SecretStore):
    """Dictionary-backed secret store.

    Attributes:
        name: Backend name used in error messages
    """

    name = "in-memory secret store"

    def __init__(self):
        self._secrets: Dict[Tuple[str, str], str] = {}
        self._lock = threading.Lock()

    def create(self, kind: Union[SourceKind, str], key: str, value: str) -> None:
        kind = kind_name(kind)
        with self._lock:
            if (kind, key) in self._secrets:
                raise SecretAlreadyExistsError(kind, key)
            self._secrets[(kind, key)] = value
        logger.debug(f"Stored secret {kind}/{key}")

    def resolve(self, kind: Union[SourceKind, str], key: str) -> str:
        kind = kind_name(kind)
        with self._lock:
            try:
                return self._secrets[(kind, key)]
            except KeyError:
                raise SecretNotFoundError(kind, key) from None

    def keys(self) -> List[Tuple[str, str]]:
        """List the (kind, key) pairs currently stored."""
        with self._lock:
            return list(self._secrets)

    def __len__(self) -> int:
        with self._lock:
            return len(self._secrets)
