"""Sanitizer service for sensitive parameter and output values.

Before a run or result is written to the history store, sensitive values are
pushed into the secret store and replaced with indirections keyed by
``run_id + name``. When a bundle action or a caller needs the values again,
the service resolves those indirections back to plaintext.

Sensitivity is asked of the bundle metadata on every call and never stored on
a strategy or output, so a change in the bundle applies to existing records
without migrating them.
"""

import logging
from typing import Dict, List, Mapping, Optional

from bundlekeeper.bundle.metadata import BundleMetadata
from bundlekeeper.bundle.values import ParameterValue
from bundlekeeper.exception import (
    BundleKeeperException,
    OutputSanitizationError,
    ResolveError,
    StoreError,
)
from bundlekeeper.parameters.parameter_set import ParameterSet
from bundlekeeper.parameters.provider import ParameterProvider
from bundlekeeper.run.output import Output, Outputs
from bundlekeeper.run.run import Run
from bundlekeeper.secrets.store import SecretStore
from bundlekeeper.secrets.strategy import (
    SourceKind,
    Strategy,
    default_strategy,
    encode_secret,
    secret_key,
)

logger = logging.getLogger(__name__)

# Output bytes are stored as text; undecodable bytes survive the round trip
SECRET_BYTES_ERRORS = "surrogateescape"


class SanitizerService:
    """Service moving sensitive data between runs and the secret store.

    Writes to the secret store are not transactional: when a batch fails,
    values written before the failure stay in the store.

    Attributes:
        parameter_provider: Resolves parameter set strategies to raw values
        secret_store: Secret store receiving sensitive plaintext
    """

    def __init__(
        self, parameter_provider: ParameterProvider, secret_store: SecretStore
    ):
        self.parameter_provider = parameter_provider
        self.secret_store = secret_store

    def raw_parameters(
        self,
        params: Mapping[str, ParameterValue],
        bundle: BundleMetadata,
        run_id: str,
    ) -> Optional[List[Strategy]]:
        """Sanitize raw parameter values into strategies.

        Each value is rendered to its canonical string form before being
        sanitized with :meth:`parameters`.

        Args:
            params: Parameter name to typed value
            bundle: Bundle metadata
            run_id: ID of the run that owns the values

        Returns:
            Sanitized strategies, or None when there are no parameters

        Raises:
            ConversionError: If the bundle rejects a value for its type
            StoreError: If a sensitive value cannot be stored
        """
        strategies = []
        for name, value in params.items():
            string_value = bundle.write_parameter_to_string(name, value)
            strategies.append(default_strategy(name, string_value))

        return self.parameters(strategies, bundle, run_id)

    def parameters(
        self,
        params: List[Strategy],
        bundle: BundleMetadata,
        run_id: str,
    ) -> Optional[List[Strategy]]:
        """Sanitize parameter strategies.

        Every strategy is rebuilt from its name and value, dropping any
        previous indirection. Sensitive values are stored under
        ``run_id + name`` and replaced by a secret indirection. Output order
        matches input order.

        Args:
            params: Strategies to sanitize
            bundle: Bundle metadata
            run_id: ID of the run that owns the values

        Returns:
            Sanitized strategies, or None when ``params`` is empty

        Raises:
            StoreError: If a sensitive value cannot be stored. Values stored
                before the failure are left in place.
        """
        strategies = []
        for param in params:
            strategy = default_strategy(param.name, param.value)
            if bundle.is_sensitive_parameter(param.name):
                strategy = encode_secret(strategy, run_id)
                try:
                    self.secret_store.create(
                        strategy.source.key, strategy.source.value, strategy.value
                    )
                except StoreError as e:
                    raise StoreError(
                        f"failed to save sensitive param {param.name!r} to secret store: "
                        f"{e.message}",
                        key=strategy.source.value,
                        details={"parameter": param.name},
                    ) from e
                logger.debug(
                    f"Sanitized parameter {param.name!r} as {strategy.source.value}"
                )

            strategies.append(strategy)

        if not strategies:
            return None

        return strategies

    def parameter_overrides(self, run: Run) -> Run:
        """Move a run's sensitive parameter overrides into the secret store.

        Sensitive overrides are stored under ``run.id + name`` and kept on
        the returned run as secret strategies in ``sensitive_overrides``.
        Other overrides stay in ``parameter_overrides``.

        Args:
            run: Run whose overrides are sanitized

        Returns:
            The run itself when no override is sensitive, otherwise a copy
            that can be persisted

        Raises:
            ConversionError: If the bundle rejects a non-string value
            StoreError: If a sensitive value cannot be stored
        """
        bundle = run.metadata()
        sensitive = [
            name
            for name in run.parameter_overrides
            if bundle.is_sensitive_parameter(name)
        ]
        if not sensitive:
            return run

        strategies = []
        for name in sensitive:
            value = run.parameter_overrides[name]
            if not isinstance(value, str):
                value = bundle.write_parameter_to_string(name, value)
            strategies.append(default_strategy(name, value))

        encoded = self.parameters(strategies, bundle, run.id)
        replaced = {s.name for s in encoded}

        sanitized = run.model_copy(deep=True)
        sanitized.parameter_overrides = {
            name: value
            for name, value in run.parameter_overrides.items()
            if name not in replaced
        }
        sanitized.sensitive_overrides = [
            s for s in run.sensitive_overrides if s.name not in replaced
        ] + encoded
        return sanitized

    def resolve_parameter_set(
        self, parameter_set: ParameterSet, bundle: BundleMetadata
    ) -> Dict[str, ParameterValue]:
        """Resolve a parameter set to typed values.

        Values the bundle cannot convert keep their raw form.

        Args:
            parameter_set: Set to resolve
            bundle: Bundle metadata

        Returns:
            Parameter name to value

        Raises:
            StoreError: If a parameter source cannot be resolved
        """
        return parameter_set.resolve(self.parameter_provider, bundle)

    def output(self, output: Output, bundle: BundleMetadata) -> Output:
        """Sanitize a single output.

        Non-sensitive outputs are returned unchanged. A sensitive output is
        returned with its key set to ``run_id + name`` and its value cleared,
        after the value is written to the secret store.

        Args:
            output: Output to sanitize
            bundle: Bundle metadata

        Returns:
            Output ready to persist

        Raises:
            BundleError: If the sensitivity check fails
            OutputSanitizationError: If the value cannot be stored. The
                encoded output is available on the exception's ``output``.
        """
        if not bundle.is_output_sensitive(output.name):
            return output

        encoded = encode_output(output)
        try:
            self.secret_store.create(
                SourceKind.SECRET,
                encoded.key,
                output.value.decode("utf-8", SECRET_BYTES_ERRORS),
            )
        except StoreError as e:
            raise OutputSanitizationError(encoded, e) from e

        logger.debug(f"Sanitized output {output.name!r} as {encoded.key}")
        return encoded

    def resolve_outputs(self, outputs: Outputs, bundle: BundleMetadata) -> Outputs:
        """Resolve the values of sensitive outputs.

        Outputs that are not sensitive, or whose sensitivity cannot be
        determined, are passed through unchanged.

        Args:
            outputs: Outputs read from the history store
            bundle: Bundle metadata

        Returns:
            Outputs with plaintext values

        Raises:
            ResolveError: If any sensitive output cannot be resolved; no
                partial result is returned
        """
        resolved = []
        for output in outputs:
            try:
                sensitive = bundle.is_output_sensitive(output.name)
            except BundleKeeperException as e:
                logger.debug(f"Passing output {output.name!r} through: {e.message}")
                sensitive = False

            if not sensitive:
                resolved.append(output)
                continue

            resolved.append(self.resolve_output(output))

        return Outputs(resolved)

    def resolve_output(self, output: Output) -> Output:
        """Read a sensitive output's value back from the secret store.

        Args:
            output: Sanitized output

        Returns:
            Copy of the output with its plaintext value

        Raises:
            ResolveError: If the secret store lookup fails
        """
        try:
            value = self.secret_store.resolve(SourceKind.SECRET, output.key)
        except StoreError as e:
            raise ResolveError(output.name, output.key, e) from e

        return output.model_copy(
            update={"value": value.encode("utf-8", SECRET_BYTES_ERRORS)}
        )


def encode_output(output: Output) -> Output:
    """Point an output at the secret store entry owned by its run."""
    return output.model_copy(
        update={"key": secret_key(output.run_id, output.name), "value": b""}
    )
