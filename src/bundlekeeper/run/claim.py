"""Records exchanged with the bundle execution runtime.

The execution runtime has no notion of namespaces and identifies an
installation by a single name, so runs are projected into an ExecutionClaim
before an action is invoked, and the runtime reports back an ExecutionResult.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from bundlekeeper.bundle.definition import Bundle
from bundlekeeper.constants import CLAIM_SCHEMA_VERSION


class ExecutionClaim(BaseModel):
    """Input record of a bundle execution."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field(CLAIM_SCHEMA_VERSION, alias="schemaVersion")
    id: str
    installation: str
    revision: str
    created: datetime
    action: str
    bundle: Bundle = Field(default_factory=Bundle)
    bundle_reference: str = Field("", alias="bundleReference")
    parameters: Dict[str, Any] = Field(default_factory=dict)
    custom: Any = None


class ExecutionResult(BaseModel):
    """Outcome reported by the execution runtime for a claim."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    claim_id: str = Field("", alias="claimId")
    created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: str
    message: str = Field("")
    output_metadata: Dict[str, Dict[str, str]] = Field(
        default_factory=dict, alias="outputMetadata"
    )
    custom: Any = None
