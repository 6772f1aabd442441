"""Unit tests for the exception hierarchy in bundlekeeper.exception.api_exceptions.

Verifies that every exception class carries the correct error code, message
and details, that the inheritance chain is intact, and that exceptions can be
used with Python's exception chaining.
"""

import pytest

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
from bundlekeeper.run import Output

# ---------------------------------------------------------------------------
# BundleKeeperException – base class contract
# ---------------------------------------------------------------------------


class TestBundleKeeperException:
    """Tests for the BundleKeeperException base class."""

    def test_stores_message(self) -> None:
        """BundleKeeperException stores the provided message."""
        assert BundleKeeperException("something broke").message == "something broke"

    def test_default_error_code_is_internal_error(self) -> None:
        """BundleKeeperException defaults to 'INTERNAL_ERROR' when no code is given."""
        assert BundleKeeperException("error").code == "INTERNAL_ERROR"

    def test_default_details_is_empty_dict(self) -> None:
        assert BundleKeeperException("error").details == {}

    def test_stores_custom_error_code_and_details(self) -> None:
        exception = BundleKeeperException(
            "error", code="CUSTOM_CODE", details={"reason": "too long"}
        )

        assert exception.code == "CUSTOM_CODE"
        assert exception.details["reason"] == "too long"

    def test_str_representation_is_message(self) -> None:
        """str(BundleKeeperException) returns the human-readable message."""
        assert str(BundleKeeperException("something went wrong")) == (
            "something went wrong"
        )


# ---------------------------------------------------------------------------
# Bundle metadata errors
# ---------------------------------------------------------------------------


class TestBundleErrors:
    """Tests for BundleError, ActionNotFoundError and ConversionError."""

    def test_bundle_error_default_code(self) -> None:
        assert BundleError("bad bundle").code == "BUNDLE_ERROR"

    def test_bundle_error_custom_code(self) -> None:
        assert BundleError("missing", code="OUTPUT_NOT_FOUND").code == "OUTPUT_NOT_FOUND"

    def test_action_not_found(self) -> None:
        """ActionNotFoundError names the action and is a BundleError."""
        exception = ActionNotFoundError("migrate")

        assert exception.code == "ACTION_NOT_FOUND"
        assert exception.details == {"action": "migrate"}
        assert "migrate" in exception.message
        assert isinstance(exception, BundleError)

    def test_conversion_error(self) -> None:
        """ConversionError names the parameter and is not a BundleError."""
        exception = ConversionError("port", "not an integer")

        assert exception.message == "unable to convert parameter 'port': not an integer"
        assert exception.details == {"parameter": "port"}
        assert not isinstance(exception, BundleError)


# ---------------------------------------------------------------------------
# Secret store errors
# ---------------------------------------------------------------------------


class TestStoreErrors:
    """Tests for StoreError and its subclasses."""

    def test_store_error_records_key(self) -> None:
        exception = StoreError("backend down", key="01HRUNpassword")

        assert exception.code == "STORE_ERROR"
        assert exception.details == {"key": "01HRUNpassword"}

    def test_store_error_without_key(self) -> None:
        assert StoreError("backend down").details == {}

    @pytest.mark.parametrize(
        "exception_class,code",
        [
            (SecretNotFoundError, "SECRET_NOT_FOUND"),
            (SecretAlreadyExistsError, "SECRET_ALREADY_EXISTS"),
        ],
    )
    def test_secret_errors(self, exception_class, code) -> None:
        """Secret lookup errors carry the kind and key and are StoreErrors."""
        exception = exception_class("secret", "01HRUNpassword")

        assert exception.code == code
        assert exception.details == {"kind": "secret", "key": "01HRUNpassword"}
        assert "secret/01HRUNpassword" in exception.message
        assert isinstance(exception, StoreError)

    def test_unsupported_source(self) -> None:
        exception = UnsupportedSourceError("vault", "host secret store")

        assert exception.code == "UNSUPPORTED_SOURCE"
        assert exception.message == "host secret store does not support 'vault' sources"


# ---------------------------------------------------------------------------
# Output errors
# ---------------------------------------------------------------------------


class TestOutputErrors:
    """Tests for OutputSanitizationError and ResolveError."""

    def test_output_sanitization_error_keeps_output(self) -> None:
        """The encoded output is available to the caller."""
        output = Output(name="kubeconfig", key="01HRUNkubeconfig")

        exception = OutputSanitizationError(output, StoreError("disk full"))

        assert exception.output is output
        assert exception.code == "OUTPUT_SANITIZATION_FAILED"
        assert exception.details == {"output": "kubeconfig", "key": "01HRUNkubeconfig"}
        assert "disk full" in exception.message
        assert isinstance(exception, StoreError)

    def test_resolve_error(self) -> None:
        exception = ResolveError(
            "kubeconfig", "01HRUNkubeconfig", SecretNotFoundError("secret", "k")
        )

        assert exception.code == "RESOLVE_ERROR"
        assert exception.message.startswith(
            "failed to resolve output 'kubeconfig' using key '01HRUNkubeconfig'"
        )
        assert not isinstance(exception, StoreError)

    def test_configuration_error(self) -> None:
        assert ConfigurationError("bad").code == "CONFIGURATION_ERROR"


# ---------------------------------------------------------------------------
# Exception chaining
# ---------------------------------------------------------------------------


class TestExceptionChaining:
    """Tests for Python exception chaining with BundleKeeperException."""

    def test_subclasses_caught_as_base_type(self) -> None:
        """Subclasses of BundleKeeperException can be caught using the base type."""
        with pytest.raises(BundleKeeperException) as exc_info:
            raise SecretNotFoundError("secret", "k")

        assert exc_info.value.code == "SECRET_NOT_FOUND"

    def test_original_cause_is_preserved_when_chained(self) -> None:
        """BundleKeeperException retains the original exception when raised with 'from'."""
        original_exception = ValueError("original error")

        try:
            try:
                raise original_exception
            except ValueError as caught:
                raise ConversionError("port", "bad") from caught
        except BundleKeeperException as wrapped:
            assert wrapped.__cause__ is original_exception
