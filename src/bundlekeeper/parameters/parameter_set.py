"""Parameter sets: named, ordered collections of parameter strategies.

User-authored sets are attached to a run as-is. The internal set is generated
by the installation manager for parameters it fills in itself, and is the one
whose sensitive entries get rewritten to secret indirections owned by the run.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from ulid import ULID

from bundlekeeper.bundle.values import ParameterValue
from bundlekeeper.constants import DOCUMENT_ID_FIELD, PARAMETER_SET_SCHEMA_VERSION
from bundlekeeper.exception import ConversionError
from bundlekeeper.secrets.strategy import Strategy

if TYPE_CHECKING:
    from bundlekeeper.bundle.metadata import BundleMetadata
    from bundlekeeper.parameters.provider import ParameterProvider

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ParameterSet(BaseModel):
    """Named set of parameter strategies.

    Attributes:
        schema_version: Document schema version
        id: Unique ID of the set
        namespace: Namespace the set belongs to
        name: Set name
        labels: Free-form labels
        created: Creation timestamp
        modified: Last modification timestamp
        parameters: Ordered parameter strategies
        internal: True for system-generated sets
    """

    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field(PARAMETER_SET_SCHEMA_VERSION, alias="schemaVersion")
    id: str = Field(default_factory=lambda: str(ULID()), alias=DOCUMENT_ID_FIELD)
    namespace: str = Field("")
    name: str = Field("")
    labels: Dict[str, str] = Field(default_factory=dict)
    created: datetime = Field(default_factory=_utcnow)
    modified: datetime = Field(default_factory=_utcnow)
    parameters: List[Strategy] = Field(default_factory=list)
    internal: bool = Field(False)

    def is_internal(self) -> bool:
        """Check whether the set was generated by the system."""
        return self.internal

    def get(self, name: str) -> Optional[Strategy]:
        """Find a parameter strategy by name."""
        for strategy in self.parameters:
            if strategy.name == name:
                return strategy
        return None

    def default_document_filter(self) -> Dict[str, Any]:
        return {"namespace": self.namespace, "name": self.name}

    def resolve(
        self, provider: ParameterProvider, bundle: BundleMetadata
    ) -> Dict[str, ParameterValue]:
        """Resolve every strategy in the set to a typed value.

        Values the bundle cannot convert to their declared type are kept
        raw instead of failing the whole set.

        Args:
            provider: Resolves strategy sources to raw values
            bundle: Converts raw values to their declared types

        Returns:
            Mapping of parameter name to value

        Raises:
            StoreError: If a source cannot be resolved
        """
        raw_values = provider.resolve_all(self)

        resolved: Dict[str, ParameterValue] = {}
        for name, raw in raw_values.items():
            try:
                resolved[name] = bundle.convert_parameter_value(name, raw)
            except ConversionError as e:
                logger.debug(f"Keeping raw value for parameter {name!r}: {e.message}")
                resolved[name] = raw
        return resolved


def new_parameter_set(
    namespace: str, name: str, *parameters: Strategy
) -> ParameterSet:
    """Create a user-authored parameter set."""
    return ParameterSet(namespace=namespace, name=name, parameters=list(parameters))


def new_internal_parameter_set(
    namespace: str, name: str, *parameters: Strategy
) -> ParameterSet:
    """Create a system-generated parameter set."""
    return ParameterSet(
        namespace=namespace,
        name=name,
        parameters=list(parameters),
        internal=True,
    )
