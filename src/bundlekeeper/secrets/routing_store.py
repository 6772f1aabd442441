"""Secret store that routes each source kind to a backend."""

import logging
from typing import Union

from bundlekeeper.exception import UnsupportedSourceError
from bundlekeeper.secrets.store import SecretStore, kind_name
from bundlekeeper.secrets.strategy import SourceKind

logger = logging.getLogger(__name__)


class RoutingSecretStore(SecretStore):
    """Send secret sources to the secrets backend and the rest to the host.

    Attributes:
        secrets: Backend holding values written by the sanitizer
        host: Store resolving env, path, command and value sources
    """

    name = "routing secret store"

    def __init__(self, secrets: SecretStore, host: SecretStore):
        self.secrets = secrets
        self.host = host

    def _route(self, kind: Union[SourceKind, str]) -> SecretStore:
        try:
            source_kind = SourceKind(kind_name(kind))
        except ValueError:
            raise UnsupportedSourceError(kind_name(kind), self.name) from None

        if source_kind == SourceKind.SECRET:
            return self.secrets
        if source_kind in (
            SourceKind.ENV,
            SourceKind.PATH,
            SourceKind.COMMAND,
            SourceKind.VALUE,
        ):
            return self.host
        raise UnsupportedSourceError(source_kind.value, self.name)

    def create(self, kind: Union[SourceKind, str], key: str, value: str) -> None:
        self._route(kind).create(kind, key, value)

    def resolve(self, kind: Union[SourceKind, str], key: str) -> str:
        store = self._route(kind)
        logger.debug(f"Resolving {kind_name(kind)}/{key} via {store.name}")
        return store.resolve(kind, key)
