"""Bundle metadata backed by a bundle definition."""

from bundlekeeper.bundle.definition import Action, Bundle, ParameterDefinition
from bundlekeeper.bundle.metadata import BundleMetadata
from bundlekeeper.bundle.values import ParameterValue, convert, to_string
from bundlekeeper.constants import ACTION_INSTALL, ACTION_UNINSTALL, ACTION_UPGRADE
from bundlekeeper.exception import ActionNotFoundError, BundleError, ConversionError

BUILTIN_ACTIONS = (ACTION_INSTALL, ACTION_UPGRADE, ACTION_UNINSTALL)


class ExtendedBundle(BundleMetadata):
    """Answers metadata queries from the definitions declared by a bundle.

    Built-in actions (install, upgrade, uninstall) are always known and always
    modify resources. Custom actions come from the bundle's action table.

    Attributes:
        bundle: Bundle definition being queried
    """

    def __init__(self, bundle: Bundle):
        self.bundle = bundle

    def _get_parameter(self, name: str) -> ParameterDefinition:
        definition = self.bundle.parameters.get(name)
        if definition is None:
            raise ConversionError(name, "parameter not defined in bundle")
        return definition

    def is_sensitive_parameter(self, name: str) -> bool:
        definition = self.bundle.parameters.get(name)
        return definition is not None and definition.sensitive

    def is_output_sensitive(self, name: str) -> bool:
        definition = self.bundle.outputs.get(name)
        if definition is None:
            raise BundleError(
                f"output {name!r} not defined in bundle",
                code="OUTPUT_NOT_FOUND",
                details={"output": name},
            )
        return definition.sensitive

    def write_parameter_to_string(self, name: str, value: ParameterValue) -> str:
        definition = self._get_parameter(name)
        try:
            return to_string(value, definition.type)
        except ValueError as e:
            raise ConversionError(name, str(e)) from e

    def convert_parameter_value(self, name: str, raw: ParameterValue) -> ParameterValue:
        definition = self._get_parameter(name)
        try:
            return convert(raw, definition.type)
        except ValueError as e:
            raise ConversionError(name, str(e)) from e

    def get_action(self, name: str) -> Action:
        if name in BUILTIN_ACTIONS:
            return Action(modifies=True, stateless=False)

        action = self.bundle.actions.get(name)
        if action is None:
            raise ActionNotFoundError(name)
        return action
