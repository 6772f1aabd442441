"""Outputs produced by a bundle action.

A sensitive output is persisted with an empty value and a key pointing into
the secret store (``run_id + name``). A non-sensitive output keeps its value
and leaves the key unused.
"""

from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from bundlekeeper.constants import RUN_SCHEMA_VERSION


class Output(BaseModel):
    """Value generated by a bundle action.

    Attributes:
        schema_version: Document schema version
        name: Output name
        namespace: Namespace of the installation
        installation: Installation name
        run_id: ID of the run that produced the output
        result_id: ID of the result the output belongs to
        key: Secret store key of a sensitive output
        value: Output contents
    """

    model_config = ConfigDict(
        populate_by_name=True,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    schema_version: str = Field(RUN_SCHEMA_VERSION, alias="schemaVersion")
    name: str
    namespace: str = Field("")
    installation: str = Field("")
    run_id: str = Field("", alias="runId")
    result_id: str = Field("", alias="resultId")
    key: str = Field("")
    value: bytes = Field(b"")

    def default_document_filter(self) -> Dict[str, Any]:
        return {"resultId": self.result_id, "name": self.name}


class Outputs:
    """Ordered collection of outputs addressable by name."""

    def __init__(self, values: Optional[List[Output]] = None):
        self._values: List[Output] = list(values or [])

    def get_by_name(self, name: str) -> Optional[Output]:
        for output in self._values:
            if output.name == name:
                return output
        return None

    def get_by_index(self, index: int) -> Optional[Output]:
        if 0 <= index < len(self._values):
            return self._values[index]
        return None

    def value(self) -> List[Output]:
        """Return a copy of the outputs list."""
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Output]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Outputs):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"Outputs({[o.name for o in self._values]!r})"
