"""Bundle definition models.

A bundle declares its parameters, outputs and custom actions. Only the parts
the sanitization layer reads are modeled here; unknown fields are kept so the
definition embedded in a run stays a faithful copy.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bundlekeeper.bundle.values import SUPPORTED_TYPES, TYPE_STRING


def _check_type(value: str) -> str:
    if value not in SUPPORTED_TYPES:
        raise ValueError(
            f"unsupported type {value!r}, expected one of {', '.join(SUPPORTED_TYPES)}"
        )
    return value


class Action(BaseModel):
    """Declared semantics of a bundle action."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    modifies: bool = Field(False, description="Action changes bundle resources")
    stateless: bool = Field(
        False, description="Action needs no existing installation or credentials"
    )
    description: Optional[str] = Field(None)


class ParameterDefinition(BaseModel):
    """Declared parameter of a bundle."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str = Field(TYPE_STRING, description="Declared JSON type")
    sensitive: bool = Field(
        False,
        alias="writeOnly",
        description="Value must never be persisted in plaintext",
    )
    default: Any = Field(None)
    required: bool = Field(False)
    description: Optional[str] = Field(None)
    applies_to: List[str] = Field(default_factory=list, alias="appliesTo")

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        return _check_type(value)


class OutputDefinition(BaseModel):
    """Declared output of a bundle."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str = Field(TYPE_STRING)
    sensitive: bool = Field(False, alias="writeOnly")
    description: Optional[str] = Field(None)
    applies_to: List[str] = Field(default_factory=list, alias="appliesTo")

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        return _check_type(value)


class Bundle(BaseModel):
    """Versioned, declarative description of an installable application."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    schema_version: str = Field("v1.2.0", alias="schemaVersion")
    name: str = Field("")
    version: str = Field("")
    description: Optional[str] = Field(None)
    parameters: Dict[str, ParameterDefinition] = Field(default_factory=dict)
    outputs: Dict[str, OutputDefinition] = Field(default_factory=dict)
    actions: Dict[str, Action] = Field(default_factory=dict)
    custom: Dict[str, Any] = Field(default_factory=dict)
