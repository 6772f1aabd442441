"""Dynamically typed bundle parameter values.

Parameter values are limited to the JSON shapes a bundle can declare:
null, boolean, integer, number, string, array and object. Every conversion
here accepts only those shapes and either returns one or raises ValueError.
"""

import json
from typing import Dict, List, Union

ParameterValue = Union[
    None,
    bool,
    int,
    float,
    str,
    List["ParameterValue"],
    Dict[str, "ParameterValue"],
]

TYPE_STRING = "string"
TYPE_INTEGER = "integer"
TYPE_NUMBER = "number"
TYPE_BOOLEAN = "boolean"
TYPE_OBJECT = "object"
TYPE_ARRAY = "array"
TYPE_FILE = "file"

SUPPORTED_TYPES = (
    TYPE_STRING,
    TYPE_INTEGER,
    TYPE_NUMBER,
    TYPE_BOOLEAN,
    TYPE_OBJECT,
    TYPE_ARRAY,
    TYPE_FILE,
)


def is_parameter_value(value: object) -> bool:
    """Check that value only contains JSON shapes."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return True
    if isinstance(value, list):
        return all(is_parameter_value(v) for v in value)
    if isinstance(value, dict):
        return all(
            isinstance(k, str) and is_parameter_value(v) for k, v in value.items()
        )
    return False


def matches_type(value: ParameterValue, declared_type: str) -> bool:
    """Check a typed value against a declared bundle type.

    bool is a subclass of int in Python, so booleans never match the
    numeric types.
    """
    if declared_type in (TYPE_STRING, TYPE_FILE):
        return isinstance(value, str)
    if declared_type == TYPE_BOOLEAN:
        return isinstance(value, bool)
    if declared_type == TYPE_INTEGER:
        if isinstance(value, bool):
            return False
        return isinstance(value, int) or (
            isinstance(value, float) and value.is_integer()
        )
    if declared_type == TYPE_NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if declared_type == TYPE_OBJECT:
        return isinstance(value, dict)
    if declared_type == TYPE_ARRAY:
        return isinstance(value, list)
    raise ValueError(f"unsupported type {declared_type!r}")


def to_string(value: ParameterValue, declared_type: str) -> str:
    """Render a typed value in its canonical string form.

    Strings are written as-is, everything else as compact JSON.

    Raises:
        ValueError: If the value does not match the declared type
    """
    if not is_parameter_value(value):
        raise ValueError(f"{type(value).__name__} is not a parameter value")
    if not matches_type(value, declared_type):
        raise ValueError(
            f"value of type {type(value).__name__} is not a valid {declared_type}"
        )
    if isinstance(value, str):
        return value
    if declared_type == TYPE_INTEGER and isinstance(value, float):
        value = int(value)
    return json.dumps(value, separators=(",", ":"), sort_keys=True)


def from_string(raw: str, declared_type: str) -> ParameterValue:
    """Parse a canonical string into the declared type.

    Raises:
        ValueError: If the string cannot represent the declared type
    """
    if declared_type in (TYPE_STRING, TYPE_FILE):
        return raw
    if declared_type == TYPE_BOOLEAN:
        lowered = raw.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise ValueError(f"{raw!r} is not a boolean")
    if declared_type == TYPE_INTEGER:
        return int(raw.strip())
    if declared_type == TYPE_NUMBER:
        try:
            return int(raw.strip())
        except ValueError:
            return float(raw.strip())
    if declared_type in (TYPE_OBJECT, TYPE_ARRAY):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON: {e.msg}") from e
        if not matches_type(parsed, declared_type):
            raise ValueError(f"JSON value is not a valid {declared_type}")
        return parsed
    raise ValueError(f"unsupported type {declared_type!r}")


def convert(raw: ParameterValue, declared_type: str) -> ParameterValue:
    """Convert a raw resolved value into the declared type.

    Strings are parsed; values that already carry a type are checked.

    Raises:
        ValueError: If the value cannot represent the declared type
    """
    if isinstance(raw, str):
        return from_string(raw, declared_type)
    if not is_parameter_value(raw) or not matches_type(raw, declared_type):
        raise ValueError(
            f"value of type {type(raw).__name__} is not a valid {declared_type}"
        )
    return raw
