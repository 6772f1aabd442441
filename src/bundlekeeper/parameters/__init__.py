"""Parameter sets and parameter providers.

Exports ParameterSet with its constructors, the ParameterProvider interface,
and SecretParameterProvider, which resolves strategies through a secret store.
"""

from bundlekeeper.parameters.parameter_set import (
    ParameterSet,
    new_internal_parameter_set,
    new_parameter_set,
)
from bundlekeeper.parameters.provider import ParameterProvider, SecretParameterProvider

__all__ = [
    "ParameterProvider",
    "ParameterSet",
    "SecretParameterProvider",
    "new_internal_parameter_set",
    "new_parameter_set",
]
