"""Results record the outcome of a run."""

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field
from ulid import ULID

from bundlekeeper.constants import (
    DOCUMENT_ID_FIELD,
    RUN_SCHEMA_VERSION,
    STATUS_CANCELED,
    STATUS_FAILED,
    STATUS_PENDING,
    STATUS_RUNNING,
    STATUS_SUCCEEDED,
    STATUS_UNKNOWN,
)
from bundlekeeper.run.output import Output

STATUSES = (
    STATUS_RUNNING,
    STATUS_SUCCEEDED,
    STATUS_FAILED,
    STATUS_CANCELED,
    STATUS_PENDING,
    STATUS_UNKNOWN,
)


class Result(BaseModel):
    """Outcome of a run.

    Attributes:
        schema_version: Document schema version
        id: Unique ID of the result
        created: Creation timestamp
        namespace: Namespace of the installation
        installation: Installation name
        run_id: ID of the run the result belongs to
        status: Execution status
        message: Human-readable outcome message
        output_metadata: Per-output metadata reported by the runtime
        custom: Runtime-specific extension data
    """

    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field(RUN_SCHEMA_VERSION, alias="schemaVersion")
    id: str = Field(default_factory=lambda: str(ULID()), alias=DOCUMENT_ID_FIELD)
    created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    namespace: str = Field("")
    installation: str = Field("")
    run_id: str = Field("", alias="runId")
    status: str = Field(STATUS_UNKNOWN)
    message: str = Field("")
    output_metadata: Dict[str, Dict[str, str]] = Field(
        default_factory=dict, alias="outputMetadata"
    )
    custom: Any = None

    def default_document_filter(self) -> Dict[str, Any]:
        return {DOCUMENT_ID_FIELD: self.id}

    def is_final(self) -> bool:
        """Check whether the status can no longer change."""
        return self.status in (STATUS_SUCCEEDED, STATUS_FAILED, STATUS_CANCELED)

    def new_output(self, name: str, value: bytes) -> Output:
        """Create an output owned by this result."""
        return Output(
            name=name,
            namespace=self.namespace,
            installation=self.installation,
            run_id=self.run_id,
            result_id=self.id,
            value=value,
        )
