"""Parameter providers resolve parameter set strategies to raw values."""

from abc import ABC, abstractmethod
from typing import Dict

from bundlekeeper.bundle.values import ParameterValue
from bundlekeeper.exception import StoreError
from bundlekeeper.parameters.parameter_set import ParameterSet
from bundlekeeper.secrets.store import SecretStore
from bundlekeeper.secrets.strategy import SourceKind, Strategy


class ParameterProvider(ABC):
    """Abstract resolver for the strategies of a parameter set."""

    @abstractmethod
    def resolve_all(self, parameter_set: ParameterSet) -> Dict[str, ParameterValue]:
        """Resolve every strategy in a parameter set.

        Args:
            parameter_set: Set whose strategies are resolved

        Returns:
            Mapping of parameter name to raw value

        Raises:
            StoreError: If a source cannot be resolved
        """
        pass


class SecretParameterProvider(ParameterProvider):
    """Resolves strategies through a secret store.

    Strategies without a source resolve to their own value and value sources
    to the source value. Every other source kind is looked up in the store.

    Attributes:
        secrets: Store used for secret, env, path and command sources
    """

    def __init__(self, secrets: SecretStore):
        self.secrets = secrets

    def resolve_all(self, parameter_set: ParameterSet) -> Dict[str, ParameterValue]:
        resolved: Dict[str, ParameterValue] = {}
        for strategy in parameter_set.parameters:
            try:
                resolved[strategy.name] = self.resolve(strategy)
            except StoreError as e:
                raise StoreError(
                    f"unable to resolve parameter {parameter_set.name}.{strategy.name} "
                    f"from {strategy.source.key.value} {strategy.source.value}: {e.message}",
                    key=strategy.source.value,
                    details={
                        "parameter_set": parameter_set.name,
                        "parameter": strategy.name,
                    },
                ) from e
        return resolved

    def resolve(self, strategy: Strategy) -> str:
        """Resolve a single strategy to its raw value."""
        source = strategy.source
        if source.is_empty():
            return strategy.value
        if source.key == SourceKind.VALUE:
            return source.value
        return self.secrets.resolve(source.key, source.value)
