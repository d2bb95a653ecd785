"""Pydantic models for the apidef SDK validator.

This module contains the model definitions shared by the type registry,
the parameter validator and the schema layer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import AliasChoices, Field, model_validator

from apidef.sdk.models import SdkBaseModel

from ._types import Placement


class TypeDefinitionModel(SdkBaseModel):
    """A registered value type: a checker plus optional pipeline stages.

    The parameter pipeline for a value of this type is::

        value = parser(value)                 # if a parser is defined
        if not checker(value, params): fail   # always
        value = formatter(value)              # if formatting is enabled

    Attributes:
        name: Type name, starts with an uppercase letter.
        checker: ``checker(value, params) -> bool``.
        parser: ``parser(value) -> value``. Must not raise for bad input;
            it returns the input unchanged and lets the checker reject it.
        formatter: ``formatter(value) -> value``, applied to checked values.
        params_checker: ``params_checker(params) -> bool``, validates the
            constraint args a parameter declares for this type.
        description: Human readable description (used for documentation).
        is_builtin: Whether the type ships with apidef.
        is_params_required: Whether a parameter of this type must declare
            constraint args (e.g. the allowed values of an ``ENUM``).
        is_default_format: Whether the formatter runs for parameters that
            do not set ``format`` explicitly.
    """

    name: str
    checker: Callable[..., Any]
    parser: Callable[..., Any] | None = None
    formatter: Callable[..., Any] | None = None
    params_checker: Callable[..., Any] | None = None
    description: str = ""
    is_builtin: bool = False
    is_params_required: bool = False
    is_default_format: bool = False


class TypeInfoModel(SdkBaseModel):
    """Read-only description of a registered type, for documentation consumers."""

    name: str
    description: str
    is_builtin: bool
    has_parser: bool
    has_formatter: bool
    has_params_checker: bool
    is_params_required: bool
    is_default_format: bool


class ParameterSpecModel(SdkBaseModel):
    """Declaration of one named parameter of a route.

    Attributes:
        name: The parameter name (filled in when declared on a route).
        type: Name of a registered type.
        description: Free text, also accepted as ``comment``.
        required: Whether the parameter must be present in the input.
        default: Value used verbatim when the parameter is absent.
        has_default: Whether a default was explicitly provided, so that
            ``None`` can itself be a default.
        params: Constraint args handed to the type's checker
            (a list for ``ENUM``, a ``{"min": .., "max": ..}`` mapping for numbers).
        format: Whether to run the type's formatter; ``None`` defers to the
            type's ``is_default_format``.
        place: Where the value is read from: query, body or path.

    Example:
        >>> ParameterSpecModel(type="Integer", required=True)
        >>> ParameterSpecModel(type="ENUM", params=["A", "B", 1], default="A")
    """

    name: str = ""
    type: str
    description: str = Field(
        default="", validation_alias=AliasChoices("description", "comment")
    )
    required: bool = False
    default: Any | None = None
    has_default: bool = False
    params: Any | None = None
    format: bool | None = None
    place: Placement | None = None

    @model_validator(mode="before")
    @classmethod
    def set_has_default(cls, values: Any) -> Any:
        """Set has_default based on whether default is present in input."""
        if isinstance(values, dict) and "default" in values:
            values = {**values, "has_default": True}
        return values


class CheckedRequestModel(SdkBaseModel):
    """Sanitized request input, split by placement."""

    query: dict[str, Any] = Field(default_factory=dict)
    body: dict[str, Any] = Field(default_factory=dict)
    path: dict[str, Any] = Field(default_factory=dict)


# Update forward references
TypeDefinitionModel.model_rebuild()
ParameterSpecModel.model_rebuild()
