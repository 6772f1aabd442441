"""Host secret store.

Resolves values from the machine running the orchestrator: environment
variables, files, shell commands and literal values. The host store is
read-only; sensitive values produced by a run are never written here.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Union

from bundlekeeper.constants import DEFAULT_COMMAND_TIMEOUT
from bundlekeeper.exception import (
    SecretNotFoundError,
    StoreError,
    UnsupportedSourceError,
)
from bundlekeeper.secrets.store import SecretStore, kind_name
from bundlekeeper.secrets.strategy import SourceKind

logger = logging.getLogger(__name__)


class HostSecretStore(SecretStore):
    """Read-only store for env, path, command and value sources.

    Attributes:
        command_timeout: Seconds a command source may run
    """

    name = "host secret store"

    def __init__(self, command_timeout: int = DEFAULT_COMMAND_TIMEOUT):
        self.command_timeout = command_timeout

    def create(self, kind: Union[SourceKind, str], key: str, value: str) -> None:
        raise UnsupportedSourceError(kind_name(kind), self.name)

    def resolve(self, kind: Union[SourceKind, str], key: str) -> str:
        kind = kind_name(kind)
        if kind == SourceKind.ENV.value:
            return self._resolve_env(key)
        if kind == SourceKind.PATH.value:
            return self._resolve_path(key)
        if kind == SourceKind.COMMAND.value:
            return self._resolve_command(key)
        if kind == SourceKind.VALUE.value:
            return key
        raise UnsupportedSourceError(kind, self.name)

    @staticmethod
    def _resolve_env(key: str) -> str:
        value = os.environ.get(key)
        if value is None:
            raise SecretNotFoundError(SourceKind.ENV.value, key)
        return value

    @staticmethod
    def _resolve_path(key: str) -> str:
        path = Path(os.path.expanduser(key))
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise SecretNotFoundError(SourceKind.PATH.value, key) from None
        except OSError as e:
            raise StoreError(f"could not read {key}: {e}", key=key) from e

    def _resolve_command(self, key: str) -> str:
        logger.debug(f"Resolving command source: {key}")
        try:
            completed = subprocess.run(
                key,
                shell=True,
                capture_output=True,
                text=True,
                timeout=self.command_timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise StoreError(
                f"command timed out after {self.command_timeout} seconds: {key}",
                key=key,
            ) from e
        except OSError as e:
            raise StoreError(f"could not run command {key!r}: {e}", key=key) from e

        if completed.returncode != 0:
            raise StoreError(
                f"command {key!r} exited with status {completed.returncode}: "
                f"{completed.stderr.strip()}",
                key=key,
            )
        return completed.stdout.rstrip("\n")
