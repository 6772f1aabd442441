"""Bundle metadata interface.

This module defines the questions the sanitization layer asks about a bundle:
which parameters and outputs are sensitive, how parameter values convert to
and from their canonical string form, and what an action declares about
itself. Sensitivity is decided here and nowhere else.
"""

from abc import ABC, abstractmethod

from bundlekeeper.bundle.definition import Action
from bundlekeeper.bundle.values import ParameterValue


class BundleMetadata(ABC):
    """Abstract oracle answering sensitivity and conversion queries."""

    @abstractmethod
    def is_sensitive_parameter(self, name: str) -> bool:
        """Report whether a parameter holds sensitive data.

        Args:
            name: Parameter name

        Returns:
            True if the value must not be persisted in plaintext
        """
        pass

    @abstractmethod
    def is_output_sensitive(self, name: str) -> bool:
        """Report whether an output holds sensitive data.

        Args:
            name: Output name

        Returns:
            True if the value must not be persisted in plaintext

        Raises:
            BundleError: If the output is not defined in the bundle
        """
        pass

    @abstractmethod
    def write_parameter_to_string(self, name: str, value: ParameterValue) -> str:
        """Render a parameter value in its canonical string form.

        Args:
            name: Parameter name
            value: Typed parameter value

        Returns:
            Canonical string form

        Raises:
            ConversionError: If the declared type rejects the value
        """
        pass

    @abstractmethod
    def convert_parameter_value(self, name: str, raw: ParameterValue) -> ParameterValue:
        """Convert a raw resolved value into the parameter's declared type.

        Args:
            name: Parameter name
            raw: Raw value, usually a string read back from a source

        Returns:
            Typed parameter value

        Raises:
            ConversionError: If the declared type rejects the value
        """
        pass

    @abstractmethod
    def get_action(self, name: str) -> Action:
        """Look up the declared semantics of an action.

        Args:
            name: Action name

        Returns:
            Action definition

        Raises:
            ActionNotFoundError: If the bundle does not define the action
        """
        pass
