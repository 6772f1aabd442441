"""Value strategies: named values with an optional indirection.

A strategy names a value and, through its source, where the real value lives.
Sensitive values are persisted as an indirection into the secret store; the
plaintext is kept on the in-memory strategy only long enough to be written to
the store and is dropped whenever the strategy is serialized.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
)


class SourceKind(str, Enum):
    """Kinds of indirection a strategy source can point at.

    Attributes:
        SECRET: Value lives in the secret store under the source value
        ENV: Value is read from an environment variable
        PATH: Value is read from a file
        COMMAND: Value is the output of a shell command
        VALUE: Source value is the literal value
    """

    SECRET = "secret"
    ENV = "env"
    PATH = "path"
    COMMAND = "command"
    VALUE = "value"


class Source(BaseModel):
    """Where a strategy's real value is stored."""

    model_config = ConfigDict(frozen=True)

    key: Optional[SourceKind] = Field(None, description="Indirection kind")
    value: str = Field("", description="Kind-specific lookup key")

    def is_empty(self) -> bool:
        return self.key is None


class Strategy(BaseModel):
    """A named value and the source it is resolved from."""

    name: str
    value: str = Field("", description="Plaintext value, never persisted for secrets")
    source: Source = Field(default_factory=Source)

    def is_secret(self) -> bool:
        """Check whether the value is held by the secret store."""
        return self.source.key == SourceKind.SECRET

    @model_serializer(mode="wrap")
    def _serialize(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        if self.is_secret():
            data.pop("value", None)
        return data


def secret_key(run_id: str, name: str) -> str:
    """Build the secret store key for a value owned by a run."""
    return run_id + name


def default_strategy(name: str, value: str) -> Strategy:
    """Build a plain strategy carrying its plaintext value and no source."""
    return Strategy(name=name, value=value)


def value_strategy(name: str, value: str) -> Strategy:
    """Build a strategy whose source is the literal value."""
    return Strategy(
        name=name, value=value, source=Source(key=SourceKind.VALUE, value=value)
    )


def encode_secret(strategy: Strategy, run_id: str) -> Strategy:
    """Point a strategy at the secret store entry owned by a run.

    Nothing is written to the secret store here. The caller must store the
    plaintext under ``run_id + name`` before the strategy is persisted,
    otherwise resolving it later fails with SecretNotFoundError.

    Args:
        strategy: Strategy to encode
        run_id: ID of the run that owns the value

    Returns:
        Copy of the strategy with a secret source
    """
    return strategy.model_copy(
        update={
            "source": Source(
                key=SourceKind.SECRET, value=secret_key(run_id, strategy.name)
            )
        }
    )
