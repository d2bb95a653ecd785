"""Parameter checking pipeline and error types for the apidef validator."""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ._types import MISSING, OMITTED
from .models import ParameterSpecModel, TypeDefinitionModel

if TYPE_CHECKING:
    from .registry import TypeRegistry

logger = logging.getLogger(__name__)


class DefinitionError(ValueError):
    """Raised for mistakes made while defining types and routes.

    These are programming errors: they surface at startup and are not
    meant to be turned into client responses.
    """

    pass


class SchemaLockedError(DefinitionError):
    """Raised when a route schema is changed after it was initialized."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"{key} is already initialized, cannot be changed")


class ValidationError(ValueError):
    """Base class for request validation failures.

    The message text is part of the public contract; ``kind`` lets callers
    tell the failures apart without parsing it.
    """

    kind = "validation"


class MissingParameterError(ValidationError):
    """A required parameter is absent and has no default."""

    kind = "missing_parameter"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"missing required parameter '{name}' is required!")


class IncorrectParameterError(ValidationError):
    """A parameter value was rejected by its type's checker."""

    kind = "incorrect_parameter"

    def __init__(self, name: str, type_name: str, params: Any = None):
        self.name = name
        self.type_name = type_name
        self.params = params
        message = f"incorrect parameter '{name}' should be valid {type_name}"
        if params is not None:
            message += f" with additional restrictions: {format_restrictions(params)}"
        super().__init__(message)


class RequiredOneOfError(ValidationError):
    """None of the members of a required-one-of group is present."""

    kind = "required_one_of"

    def __init__(self, names: tuple[str, ...] | list[str]):
        self.names = tuple(names)
        super().__init__(f"missing required parameter one of {', '.join(self.names)} is required")


def format_restrictions(params: Any) -> str:
    """Render constraint args for error messages, keeping declaration order.

    >>> format_restrictions(["A", "B", 1])
    'A,B,1'
    >>> format_restrictions({"min": 0, "max": 10})
    'min=0,max=10'
    """
    if isinstance(params, Mapping):
        return ",".join(f"{key}={value}" for key, value in params.items())
    if isinstance(params, list | tuple):
        return ",".join(str(item) for item in params)
    return str(params)


class ParameterValidator:
    """Validates one named value against one parameter spec.

    Pipeline:
        1. absent value: default (verbatim), missing error, or ``OMITTED``
        2. ``parser(value)`` when the type has a parser
        3. ``checker(value, params)``, failing with ``IncorrectParameterError``
        4. ``formatter(value)`` when formatting is enabled for the field
    """

    def __init__(self, registry: "TypeRegistry"):
        self.registry = registry

    def validate(self, name: str, value: Any, spec: ParameterSpecModel) -> Any:
        """Validate a single value.

        Args:
            name: Parameter name, used in error messages
            value: Raw input value, or ``MISSING`` when the input lacks it
            spec: The declared parameter

        Returns:
            The checked (and possibly formatted) value, the default for an
            absent parameter, or ``OMITTED``

        Raises:
            MissingParameterError: required parameter absent without default
            IncorrectParameterError: the checker rejected the value
            DefinitionError: the spec names an unregistered type
        """
        if value is MISSING:
            # Defaults are trusted as already valid and formatted.
            if spec.has_default:
                return spec.default
            if spec.required:
                raise MissingParameterError(name)
            return OMITTED

        type_def = self.registry.get(spec.type)
        if type_def is None:
            raise DefinitionError(f"Unknown type '{spec.type}' for parameter '{name}'")

        if type_def.parser is not None:
            value = type_def.parser(value)

        if not type_def.checker(value, spec.params):
            logger.debug(f"Parameter '{name}' rejected by {type_def.name} checker")
            raise IncorrectParameterError(name, type_def.name, spec.params)

        if type_def.formatter is not None and self._should_format(spec, type_def):
            value = type_def.formatter(value)

        return value

    @staticmethod
    def _should_format(spec: ParameterSpecModel, type_def: TypeDefinitionModel) -> bool:
        if spec.format is None:
            return type_def.is_default_format
        return spec.format
