"""Run records: one execution attempt of an action against an installation.

A run owns its parameter sets and an independent copy of the bundle
definition it executed. Sensitive parameter values reach the history store
only as secret indirections; the plaintext mapping used to invoke the bundle
lives in ``parameters``, which is rebuilt on demand and never serialized.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from ulid import ULID

from bundlekeeper.bundle.definition import Bundle
from bundlekeeper.bundle.extended_bundle import ExtendedBundle
from bundlekeeper.constants import (
    DOCUMENT_ID_FIELD,
    INSTALLATION_SEPARATOR,
    RUN_SCHEMA_VERSION,
)
from bundlekeeper.exception import BundleError, ConversionError
from bundlekeeper.parameters.parameter_set import ParameterSet
from bundlekeeper.parameters.provider import ParameterProvider
from bundlekeeper.run.claim import ExecutionClaim, ExecutionResult
from bundlekeeper.run.result import Result
from bundlekeeper.secrets.strategy import Strategy, encode_secret

logger = logging.getLogger(__name__)

# Name reported when a sensitive override cannot be resolved
OVERRIDES_SET_NAME = "parameterOverrides"


def _new_id() -> str:
    return str(ULID())


class Run(BaseModel):
    """Execution of an installation's bundle.

    Attributes:
        schema_version: Document schema version
        id: Unique ID of the run
        created: Creation timestamp
        namespace: Namespace of the installation
        installation: Installation name
        revision: Unique revision of the installation
        action: Action executed against the installation
        bundle: Owned copy of the bundle definition
        bundle_reference: Canonical reference to the bundle
        bundle_digest: Digest of the bundle
        parameter_overrides: Parameter values given for this run, taking
            precedence over parameter sets. Sensitive entries must be moved to
            sensitive_overrides before the run is persisted.
        sensitive_overrides: Sensitive parameter overrides as secret strategies
        credential_sets: Names of the credential sets used
        parameter_sets: Parameter sets used, at most one of them internal
        parameters: Resolved parameter values (transient, never persisted)
        custom: Runtime-specific extension data
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    schema_version: str = Field(RUN_SCHEMA_VERSION, alias="schemaVersion")
    id: str = Field(default_factory=_new_id, alias=DOCUMENT_ID_FIELD)
    created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    namespace: str = Field("")
    installation: str = Field("")
    revision: str = Field(default_factory=_new_id)
    action: str = Field("")
    bundle: Bundle = Field(default_factory=Bundle)
    bundle_reference: str = Field("", alias="bundleReference")
    bundle_digest: str = Field("", alias="bundleDigest")
    parameter_overrides: Dict[str, Any] = Field(
        default_factory=dict, alias="parameterOverrides"
    )
    sensitive_overrides: List[Strategy] = Field(
        default_factory=list, alias="sensitiveOverrides"
    )
    credential_sets: List[str] = Field(default_factory=list, alias="credentialSets")
    parameter_sets: List[ParameterSet] = Field(
        default_factory=list, alias="parameterSets"
    )
    parameters: Dict[str, Any] = Field(default_factory=dict, exclude=True)
    custom: Any = None

    @field_validator("namespace", "installation")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if INSTALLATION_SEPARATOR in value:
            raise ValueError(
                f"{value!r} must not contain {INSTALLATION_SEPARATOR!r}"
            )
        return value

    @field_validator("bundle")
    @classmethod
    def copy_bundle(cls, value: Bundle) -> Bundle:
        return value.model_copy(deep=True)

    @model_validator(mode="after")
    def validate_internal_parameter_sets(self) -> "Run":
        internal = [p.name for p in self.parameter_sets if p.is_internal()]
        if len(internal) > 1:
            raise ValueError(
                f"a run can have at most one internal parameter set, got {internal}"
            )
        return self

    @field_serializer("parameter_overrides")
    def serialize_overrides(self, overrides: Dict[str, Any]) -> Dict[str, Any]:
        bun = self.metadata()
        unsanitized = sorted(n for n in overrides if bun.is_sensitive_parameter(n))
        if unsanitized:
            raise ValueError(
                f"sensitive parameter overrides {unsanitized} must be sanitized "
                f"before run {self.id} is persisted"
            )
        return overrides

    def default_document_filter(self) -> Dict[str, Any]:
        return {DOCUMENT_ID_FIELD: self.id}

    def metadata(self) -> ExtendedBundle:
        """Metadata queries against the embedded bundle."""
        return ExtendedBundle(self.bundle)

    def should_record(self) -> bool:
        """Decide whether the run belongs in the installation history.

        Runs are recorded for actions that modify bundle resources or that
        are stateful. Stateless, non-modifying actions (documentation,
        dry-run) are skipped. Actions the bundle does not declare are
        recorded.
        """
        modifies = True
        stateful = True

        try:
            action = self.metadata().get_action(self.action)
        except BundleError as e:
            logger.debug(f"Recording run {self.id}: {e.message}")
        else:
            modifies = action.modifies
            stateful = not action.stateless

        return modifies or stateful

    def add_parameter_set(self, parameter_set: ParameterSet) -> None:
        """Attach a parameter set to the run.

        Raises:
            ValueError: If the set is internal and the run already has one
        """
        if parameter_set.is_internal() and self.internal_parameter_set() is not None:
            raise ValueError(
                f"run {self.id} already has an internal parameter set"
            )
        self.parameter_sets.append(parameter_set)

    def internal_parameter_set(self) -> Optional[ParameterSet]:
        for parameter_set in self.parameter_sets:
            if parameter_set.is_internal():
                return parameter_set
        return None

    def encode_internal_parameter_set(self) -> Tuple[Optional[ParameterSet], bool]:
        """Point sensitive internal parameters at secrets owned by this run.

        Only the source of each sensitive parameter is rewritten; the
        plaintext is not written to any store here.

        Returns:
            The encoded internal set and True, or (None, False) when the run
            has no internal parameter set
        """
        bun = self.metadata()
        for i, parameter_set in enumerate(self.parameter_sets):
            if not parameter_set.is_internal():
                continue

            encoded = [
                encode_secret(param, self.id)
                if bun.is_sensitive_parameter(param.name)
                else param
                for param in parameter_set.parameters
            ]
            parameter_set = parameter_set.model_copy(update={"parameters": encoded})
            self.parameter_sets[i] = parameter_set
            return parameter_set, True

        return None, False

    def resolve_sensitive_data(self, provider: ParameterProvider) -> "Run":
        """Resolve the parameter values needed to execute the run.

        Parameter sets are resolved in order and later sets win on name
        collisions. Parameter overrides are applied last, sensitive ones
        resolved through the provider like any other secret strategy.

        Args:
            provider: Resolves parameter set strategies

        Returns:
            Copy of the run with ``parameters`` populated

        Raises:
            StoreError: If a parameter source cannot be resolved
        """
        bun = self.metadata()

        resolved: Dict[str, Any] = {}
        for parameter_set in self.parameter_sets:
            resolved.update(parameter_set.resolve(provider, bun))

        for name, value in self.parameter_overrides.items():
            try:
                resolved[name] = bun.convert_parameter_value(name, value)
            except ConversionError:
                resolved[name] = value

        if self.sensitive_overrides:
            overrides = ParameterSet(
                namespace=self.namespace,
                name=OVERRIDES_SET_NAME,
                parameters=self.sensitive_overrides,
            )
            resolved.update(overrides.resolve(provider, bun))

        run = self.model_copy(deep=True)
        run.parameters = resolved
        return run

    def to_claim(self) -> ExecutionClaim:
        """Project the run into the execution runtime's claim record."""
        return ExecutionClaim(
            id=self.id,
            installation=self.namespace + INSTALLATION_SEPARATOR + self.installation,
            revision=self.revision,
            created=self.created,
            action=self.action,
            bundle=self.bundle,
            bundle_reference=self.bundle_reference,
            parameters=dict(self.parameters),
            custom=self.custom,
        )

    def new_result(self, status: str) -> Result:
        """Create a result for the run."""
        return Result(
            namespace=self.namespace,
            installation=self.installation,
            run_id=self.id,
            status=status,
        )

    def new_result_from(self, execution_result: ExecutionResult) -> Result:
        """Create a result from the outcome reported by the execution runtime."""
        return Result(
            id=execution_result.id,
            created=execution_result.created,
            namespace=self.namespace,
            installation=self.installation,
            run_id=self.id,
            status=execution_result.status,
            message=execution_result.message,
            output_metadata=execution_result.output_metadata,
            custom=execution_result.custom,
        )


def new_run(namespace: str, installation: str, **fields: Any) -> Run:
    """Create a run with a fresh ID, revision and creation time.

    Args:
        namespace: Namespace of the installation
        installation: Installation name
        **fields: Other run attributes (action, bundle, ...)

    Returns:
        New Run
    """
    return Run(namespace=namespace, installation=installation, **fields)
