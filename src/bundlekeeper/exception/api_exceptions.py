"""Custom exceptions for bundlekeeper.

All custom exceptions inherit from BundleKeeperException so callers can catch
every sanitize/resolve failure with a single handler.
"""

from typing import Any, Dict, Optional


class BundleKeeperException(Exception):
    """Base exception for all bundlekeeper errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize bundlekeeper exception.

        Args:
            message: Human-readable error message
            code: Error code for programmatic handling
            details: Additional error context
        """
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


# Bundle Metadata Errors
class BundleError(BundleKeeperException):
    """Bundle metadata lookup failed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            code=kwargs.pop("code", "BUNDLE_ERROR"),
            **kwargs,
        )


class ActionNotFoundError(BundleError):
    """Action is not defined by the bundle."""

    def __init__(self, action: str, **kwargs):
        super().__init__(
            message=f"action {action!r} not defined in bundle",
            code="ACTION_NOT_FOUND",
            details={"action": action},
            **kwargs,
        )


class ConversionError(BundleKeeperException):
    """Bundle rejects a value for the parameter's declared type."""

    def __init__(self, parameter: str, message: str, **kwargs):
        details = kwargs.pop("details", {})
        details["parameter"] = parameter

        super().__init__(
            message=f"unable to convert parameter {parameter!r}: {message}",
            code="CONVERSION_ERROR",
            details=details,
            **kwargs,
        )


# Secret Store Errors
class StoreError(BundleKeeperException):
    """Secret store operation failed."""

    def __init__(self, message: str, key: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if key:
            details["key"] = key

        super().__init__(
            message=message,
            code=kwargs.pop("code", "STORE_ERROR"),
            details=details,
            **kwargs,
        )


class SecretNotFoundError(StoreError):
    """No secret is stored under the requested key."""

    def __init__(self, kind: str, key: str, **kwargs):
        super().__init__(
            message=f"secret not found: {kind}/{key}",
            code="SECRET_NOT_FOUND",
            key=key,
            details={"kind": kind},
            **kwargs,
        )


class SecretAlreadyExistsError(StoreError):
    """A secret is already stored under the requested key."""

    def __init__(self, kind: str, key: str, **kwargs):
        super().__init__(
            message=f"secret already exists: {kind}/{key}",
            code="SECRET_ALREADY_EXISTS",
            key=key,
            details={"kind": kind},
            **kwargs,
        )


class UnsupportedSourceError(StoreError):
    """The store cannot handle the requested source kind or operation."""

    def __init__(self, kind: str, store: str, **kwargs):
        super().__init__(
            message=f"{store} does not support {kind!r} sources",
            code="UNSUPPORTED_SOURCE",
            details={"kind": kind, "store": store},
            **kwargs,
        )


class OutputSanitizationError(StoreError):
    """Sensitive output was encoded but its plaintext could not be stored.

    The encoded output (key set, value cleared) is kept on ``output`` so the
    caller can decide between retrying the write and aborting the run.
    """

    def __init__(self, output: Any, cause: Exception, **kwargs):
        self.output = output
        super().__init__(
            message=f"failed to save sensitive output {output.name!r} to secret store: {cause}",
            code="OUTPUT_SANITIZATION_FAILED",
            key=output.key,
            details={"output": output.name},
            **kwargs,
        )


class ResolveError(BundleKeeperException):
    """Sensitive output could not be resolved from the secret store."""

    def __init__(self, output: str, key: str, cause: Exception, **kwargs):
        super().__init__(
            message=f"failed to resolve output {output!r} using key {key!r}: {cause}",
            code="RESOLVE_ERROR",
            details={"output": output, "key": key},
            **kwargs,
        )


# Configuration Errors
class ConfigurationError(BundleKeeperException):
    """Configuration error."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message=message, code="CONFIGURATION_ERROR", **kwargs)
