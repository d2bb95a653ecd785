"""Core validation logic for the apidef validator."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from apidef.sdk.telemetry import SpanKind, traced_operation

from ._types import MISSING, OMITTED, PLACEMENTS, SchemaSource
from .converters import DefinitionError, ParameterValidator, RequiredOneOfError
from .models import CheckedRequestModel, ParameterSpecModel
from .registry import TypeRegistry

logger = logging.getLogger(__name__)


class SchemaValidator:
    """Validates request input against declared route parameters.

    Validation is fail-fast: the first failing parameter aborts the check and
    its error propagates unchanged. Input keys that are not declared are
    dropped from the output, as are absent optional parameters without a
    default.

    Example:
        >>> validator = SchemaValidator(service.registry)
        >>> validator.check_schema({"age": "42", "extra": 1}, api)
        {'age': 42}
    """

    def __init__(self, registry: TypeRegistry):
        self.registry = registry
        self.parameter_validator = ParameterValidator(registry)

    def check_param(self, name: str, value: Any, spec: ParameterSpecModel) -> Any:
        """Validate a single value; see ``ParameterValidator.validate``."""
        return self.parameter_validator.validate(name, value, spec)

    def check_schema(
        self,
        data: Mapping[str, Any] | None,
        schema: SchemaSource | Mapping[str, ParameterSpecModel],
        required_one_of: Sequence[str] | Sequence[Sequence[str]] | None = None,
    ) -> dict[str, Any]:
        """Validate an input object against a schema.

        Args:
            data: Raw input values keyed by parameter name
            schema: An initialized route (all its parameters), or a plain
                mapping of parameter name to spec
            required_one_of: Groups to enforce instead of the route's own; a
                flat list of names is a single group

        Returns:
            Sanitized values for the declared parameters

        Raises:
            ValidationError: On the first failing parameter or group
            DefinitionError: If the route has not been initialized
        """
        if isinstance(schema, Mapping):
            specs: Mapping[str, ParameterSpecModel] = schema
            groups: Sequence[Sequence[str]] = ()
        else:
            if not schema.locked:
                raise DefinitionError(f"{schema.key} must be initialized before validating input")
            specs = schema.parameters
            groups = schema.required_groups

        if required_one_of is not None:
            groups = _normalize_groups(required_one_of)

        result = self._check_fields(data, specs, _group_members(groups))
        self._check_groups(result, groups)
        return result

    def check_request(
        self,
        api: SchemaSource,
        *,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
        path: Mapping[str, Any] | None = None,
    ) -> CheckedRequestModel:
        """Validate all placements of a request against an initialized route.

        Each placement is checked against the parameters declared for it; the
        route's required-one-of groups are then checked once against the
        values of all placements together.
        """
        if not api.locked:
            raise DefinitionError(f"{api.key} must be initialized before validating input")

        raw = {"query": query, "body": body, "path": path}
        groups = api.required_groups
        exempt = _group_members(groups)

        with traced_operation(
            "apidef.request.check", {"apidef.api.key": api.key}, kind=SpanKind.SERVER
        ) as span:
            checked: dict[str, dict[str, Any]] = {}
            for place in PLACEMENTS:
                checked[place] = self._check_fields(raw[place], api.parameters_for(place), exempt)

            merged: dict[str, Any] = {}
            for values in checked.values():
                merged.update(values)
            self._check_groups(merged, groups)
            span.set_attribute("apidef.request.params", len(merged))

        return CheckedRequestModel(**checked)

    def _check_fields(
        self,
        data: Mapping[str, Any] | None,
        specs: Mapping[str, ParameterSpecModel],
        exempt: frozenset[str],
    ) -> dict[str, Any]:
        data = data or {}
        result: dict[str, Any] = {}
        for name, spec in specs.items():
            value = data.get(name, MISSING)
            # Presence of group members is enforced by the group check.
            if value is MISSING and name in exempt and not spec.has_default:
                continue
            checked = self.parameter_validator.validate(name, value, spec)
            if checked is not OMITTED:
                result[name] = checked
        return result

    @staticmethod
    def _check_groups(values: Mapping[str, Any], groups: Iterable[Sequence[str]]) -> None:
        for group in groups:
            if not any(name in values for name in group):
                raise RequiredOneOfError(tuple(group))


def _normalize_groups(
    groups: Sequence[str] | Sequence[Sequence[str]],
) -> list[tuple[str, ...]]:
    """Accept either one group of names or a sequence of groups."""
    if isinstance(groups, str):
        raise DefinitionError("`required_one_of` expects a list of parameter names or groups")
    items = list(groups)
    if all(isinstance(item, str) for item in items):
        return [tuple(items)] if items else []
    normalized = []
    for group in items:
        if (
            isinstance(group, str)
            or not isinstance(group, Sequence)
            or not all(isinstance(name, str) for name in group)
        ):
            raise DefinitionError(
                "`required_one_of` groups must all be lists of parameter names"
            )
        normalized.append(tuple(group))
    return normalized


def _group_members(groups: Iterable[Sequence[str]]) -> frozenset[str]:
    return frozenset(name for group in groups for name in group)
