"""Exception handling package.

This package provides the exception hierarchy raised by sanitize and resolve
flows, bundle metadata lookups, and secret store backends.
"""

from bundlekeeper.exception.api_exceptions import (
    ActionNotFoundError,
    BundleError,
    BundleKeeperException,
    ConfigurationError,
    ConversionError,
    OutputSanitizationError,
    ResolveError,
    SecretAlreadyExistsError,
    SecretNotFoundError,
    StoreError,
    UnsupportedSourceError,
)

__all__ = [
    "ActionNotFoundError",
    "BundleError",
    "BundleKeeperException",
    "ConfigurationError",
    "ConversionError",
    "OutputSanitizationError",
    "ResolveError",
    "SecretAlreadyExistsError",
    "SecretNotFoundError",
    "StoreError",
    "UnsupportedSourceError",
]
