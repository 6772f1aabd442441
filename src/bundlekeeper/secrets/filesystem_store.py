"""Filesystem secret store.

Stores each secret in its own file under ``<directory>/<kind>/``. File names
are the percent-encoded key, and files are created with mode 0600. Values are
written as-is: this backend provides no encryption at rest and relies on
filesystem permissions.
"""

import logging
import os
from pathlib import Path
from typing import Union
from urllib.parse import quote

from bundlekeeper.exception import (
    SecretAlreadyExistsError,
    SecretNotFoundError,
    StoreError,
)
from bundlekeeper.secrets.store import SecretStore, kind_name
from bundlekeeper.secrets.strategy import SourceKind

logger = logging.getLogger(__name__)

SECRET_FILE_MODE = 0o600
SECRET_DIR_MODE = 0o700
# Values round-trip byte for byte, including undecodable bytes and CR
SECRET_ENCODING = "utf-8"
SECRET_ERRORS = "surrogateescape"
SECRET_FILE_TEXT = {"encoding": SECRET_ENCODING, "errors": SECRET_ERRORS, "newline": ""}


class FileSystemSecretStore(SecretStore):
    """Secret store keeping one file per secret.

    Attributes:
        directory: Root directory of the store
    """

    name = "filesystem secret store"

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path(self, kind: str, key: str) -> Path:
        return self.directory / kind / quote(key, safe="")

    def create(self, kind: Union[SourceKind, str], key: str, value: str) -> None:
        kind = kind_name(kind)
        path = self._path(kind, key)
        try:
            data = value.encode(SECRET_ENCODING, SECRET_ERRORS)
        except UnicodeEncodeError as e:
            raise StoreError(
                f"could not encode secret {kind}/{key}: {e}", key=key
            ) from e

        try:
            path.parent.mkdir(mode=SECRET_DIR_MODE, parents=True, exist_ok=True)
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, SECRET_FILE_MODE)
        except FileExistsError:
            raise SecretAlreadyExistsError(kind, key) from None
        except OSError as e:
            raise StoreError(
                f"could not create secret {kind}/{key}: {e}", key=key
            ) from e

        try:
            try:
                f = os.fdopen(fd, "wb")
            except OSError:
                os.close(fd)
                raise
            with f:
                f.write(data)
        except OSError as e:
            # No empty or partial file may shadow a later retry
            path.unlink(missing_ok=True)
            raise StoreError(
                f"could not write secret {kind}/{key}: {e}", key=key
            ) from e
        logger.debug(f"Stored secret {kind}/{key} in {self.directory}")

    def resolve(self, kind: Union[SourceKind, str], key: str) -> str:
        kind = kind_name(kind)
        path = self._path(kind, key)
        try:
            with open(path, "r", **SECRET_FILE_TEXT) as f:
                return f.read()
        except FileNotFoundError:
            raise SecretNotFoundError(kind, key) from None
        except OSError as e:
            raise StoreError(f"could not read secret {kind}/{key}: {e}", key=key) from e
