"""Bundle definitions and metadata queries.

Exports the Bundle definition model, the BundleMetadata interface consulted
for sensitivity and type conversion, and ExtendedBundle, the implementation
backed by a bundle definition.
"""

from bundlekeeper.bundle.definition import (
    Action,
    Bundle,
    OutputDefinition,
    ParameterDefinition,
)
from bundlekeeper.bundle.extended_bundle import ExtendedBundle
from bundlekeeper.bundle.metadata import BundleMetadata
from bundlekeeper.bundle.values import ParameterValue

__all__ = [
    "Action",
    "Bundle",
    "BundleMetadata",
    "ExtendedBundle",
    "OutputDefinition",
    "ParameterDefinition",
    "ParameterValue",
]
