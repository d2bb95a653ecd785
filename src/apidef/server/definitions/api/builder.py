"""Route schema builder.

An ``API`` collects everything known about one route while the application
is being defined: metadata, placed parameters and required-one-of groups.
``lock()`` closes it; every mutating method fails afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol

from pydantic import ValidationError as PydanticValidationError

from apidef.sdk.validator import (
    PLACEMENTS,
    DefinitionError,
    ParameterSpecModel,
    Placement,
    SchemaLockedError,
    TypeRegistry,
    format_restrictions,
)

from .models import APIInfoModel, ExampleModel
from .utils import SUPPORTED_METHODS, compile_path, get_schema_key

logger = logging.getLogger(__name__)


class DefinitionParent(Protocol):
    """What a route needs from its owner to be initialized."""

    @property
    def groups(self) -> Mapping[str, str]: ...

    @property
    def registry(self) -> TypeRegistry: ...


def _coerce_spec(name: str, spec: ParameterSpecModel | Mapping[str, Any] | str) -> ParameterSpecModel:
    if isinstance(spec, ParameterSpecModel):
        return spec
    if isinstance(spec, str):
        return ParameterSpecModel(type=spec)
    if isinstance(spec, Mapping):
        try:
            return ParameterSpecModel.model_validate(dict(spec))
        except PydanticValidationError as e:
            raise DefinitionError(f"Invalid declaration for parameter '{name}': {e}") from e
    raise DefinitionError(f"Parameter '{name}' must be declared with a type name or a mapping")


class API:
    """Schema of one route.

    Example:
        >>> api = API("get", "/users/:id")
        >>> api.set_title("Get user").set_group("Users")
        >>> api.params({"id": {"type": "Integer", "required": True}})
        >>> api.query({"fields": "StringArray"})
        >>> api.lock(service)
        >>> api.path_test("GET", "/users/42")
        True
    """

    def __init__(self, method: str, path: str, group: str | None = None):
        if not isinstance(method, str) or not method:
            raise DefinitionError("`method` must be a string")
        if method.lower() not in SUPPORTED_METHODS:
            raise DefinitionError(
                f"`method` must be one of: {', '.join(SUPPORTED_METHODS)} (got {method})"
            )
        if not isinstance(path, str) or not path:
            raise DefinitionError("`path` must be a string")
        if not path.startswith("/"):
            raise DefinitionError(f"`path` must start with '/': {path}")

        self.key = get_schema_key(method, path, group)
        self.method = method.lower()
        self.path = path
        self._matcher, self.path_keys = compile_path(path)

        self._group = group or ""
        self._title = ""
        self._description = ""
        self._examples: list[ExampleModel] = []
        self._response: dict[str, Any] | None = None
        self._handler: Callable[..., Any] | None = None
        self._before: list[Callable[..., Any]] = []
        self._middlewares: list[Callable[..., Any]] = []
        self._params: dict[str, ParameterSpecModel] = {}
        self._required_groups: list[tuple[str, ...]] = []
        self._locked = False

        logger.debug(f"new: {self.method} {path}")

    @classmethod
    def define(cls, options: Mapping[str, Any], group: str | None = None) -> API:
        """Build a route from a single mapping of options.

        Recognized keys: method, path, title, description, response, query,
        body, params, required_one_of, examples, handler, before, middlewares.
        """
        api = cls(options["method"], options["path"], group)
        api.set_title(options.get("title", ""))
        if group:
            api.set_group(group)
        if options.get("description"):
            api.set_description(options["description"])
        if options.get("response"):
            api.set_response(options["response"])
        if options.get("body"):
            api.body(options["body"])
        if options.get("query"):
            api.query(options["query"])
        if options.get("params"):
            api.params(options["params"])
        for names in options.get("required_one_of") or []:
            api.required_one_of(names)
        for example in options.get("examples") or []:
            api.add_example(example)
        if options.get("middlewares"):
            api.add_middlewares(*options["middlewares"])
        if options.get("before"):
            api.add_before(*options["before"])
        if options.get("handler") is not None:
            api.register(options["handler"])
        return api

    def _check_locked(self) -> None:
        if self._locked:
            raise SchemaLockedError(self.key)

    # Read-only view

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def group(self) -> str:
        return self._group

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def examples(self) -> tuple[ExampleModel, ...]:
        return tuple(self._examples)

    @property
    def response(self) -> dict[str, Any] | None:
        return self._response

    @property
    def handler(self) -> Callable[..., Any] | None:
        return self._handler

    @property
    def before_hooks(self) -> tuple[Callable[..., Any], ...]:
        return tuple(self._before)

    @property
    def middlewares(self) -> tuple[Callable[..., Any], ...]:
        return tuple(self._middlewares)

    @property
    def parameters(self) -> Mapping[str, ParameterSpecModel]:
        return dict(self._params)

    @property
    def required_groups(self) -> tuple[tuple[str, ...], ...]:
        return tuple(self._required_groups)

    def parameters_for(self, place: Placement) -> dict[str, ParameterSpecModel]:
        """Declared parameters read from ``place``, in declaration order."""
        return {name: spec for name, spec in self._params.items() if spec.place == place}

    # Metadata

    def set_title(self, title: str) -> API:
        self._check_locked()
        if not isinstance(title, str):
            raise DefinitionError("`title` must be a string")
        self._title = title
        return self

    def set_description(self, description: str) -> API:
        self._check_locked()
        if not isinstance(description, str):
            raise DefinitionError("`description` must be a string")
        self._description = description
        return self

    def set_group(self, group: str) -> API:
        self._check_locked()
        if not isinstance(group, str):
            raise DefinitionError("`group` must be a string")
        self._group = group
        return self

    def add_example(self, example: ExampleModel | Mapping[str, Any]) -> API:
        self._check_locked()
        if not isinstance(example, ExampleModel):
            try:
                example = ExampleModel.model_validate(dict(example))
            except PydanticValidationError as e:
                raise DefinitionError(
                    f"Example of {self.key} needs `input` and `output` objects: {e}"
                ) from e
        self._examples.append(example)
        return self

    def set_response(self, response: Mapping[str, Any]) -> API:
        self._check_locked()
        if not isinstance(response, Mapping):
            raise DefinitionError("`response` must be a mapping")
        self._response = dict(response)
        return self

    # Handlers

    def register(self, handler: Callable[..., Any]) -> API:
        """Set the function handling requests for this route."""
        self._check_locked()
        if not callable(handler):
            raise DefinitionError("Handler must be callable")
        self._handler = handler
        return self

    def add_before(self, *hooks: Callable[..., Any]) -> API:
        self._check_locked()
        for hook in hooks:
            if not callable(hook):
                raise DefinitionError("Before hook must be callable")
            if hook not in self._before:
                self._before.append(hook)
        return self

    def add_middlewares(self, *middlewares: Callable[..., Any]) -> API:
        self._check_locked()
        for middleware in middlewares:
            if not callable(middleware):
                raise DefinitionError("Middleware must be callable")
            if middleware not in self._middlewares:
                self._middlewares.append(middleware)
        return self

    # Parameters

    def set_param(
        self,
        name: str,
        spec: ParameterSpecModel | Mapping[str, Any] | str,
        place: Placement,
    ) -> API:
        """Declare one parameter.

        Args:
            name: Non-empty, no whitespace, must not start with ``$``
            spec: A ``ParameterSpecModel``, a mapping of its fields, or a type name
            place: Where the value comes from: ``query``, ``body`` or ``path``

        Raises:
            SchemaLockedError: If the route is already initialized
            DefinitionError: If the name, placement or spec is invalid, or the
                name is already declared on this route
        """
        self._check_locked()
        if not isinstance(name, str) or not name:
            raise DefinitionError("Parameter name must be a non-empty string")
        if any(ch.isspace() for ch in name):
            raise DefinitionError(f"Parameter name must not contain whitespace: {name!r}")
        if name.startswith("$"):
            raise DefinitionError(f"Parameter name must not start with '$': {name}")
        if place not in PLACEMENTS:
            raise DefinitionError(
                f"Parameter place must be one of {', '.join(PLACEMENTS)} (got {place})"
            )
        if name in self._params:
            raise DefinitionError(f"Parameter {name} already exists in {self.key}")

        declared = _coerce_spec(name, spec)
        self._params[name] = declared.model_copy(update={"name": name, "place": place})
        return self

    def _set_params(self, declarations: Mapping[str, Any], place: Placement) -> API:
        for name, spec in declarations.items():
            self.set_param(name, spec, place)
        return self

    def query(self, declarations: Mapping[str, Any]) -> API:
        """Declare query string parameters."""
        return self._set_params(declarations, "query")

    def body(self, declarations: Mapping[str, Any]) -> API:
        """Declare request body parameters."""
        return self._set_params(declarations, "body")

    def params(self, declarations: Mapping[str, Any]) -> API:
        """Declare path parameters."""
        return self._set_params(declarations, "path")

    def required_one_of(self, names: Iterable[str]) -> API:
        """Require at least one of ``names`` to be present.

        Names are not checked against the declared parameters.
        """
        self._check_locked()
        if isinstance(names, str):
            raise DefinitionError("`required_one_of` expects a list of parameter names")
        group = tuple(names)
        if not group or not all(isinstance(name, str) for name in group):
            raise DefinitionError("`required_one_of` expects a non-empty list of names")
        self._required_groups.append(group)
        return self

    # Lifecycle

    def lock(self, parent: DefinitionParent) -> None:
        """Close the route for changes.

        Raises:
            SchemaLockedError: If the route is already initialized
            DefinitionError: If no group is set, the group is unknown to
                ``parent``, or a parameter's type or constraint args are invalid
        """
        self._check_locked()
        if not self._group:
            raise DefinitionError(f"Please select a group for API {self.key}")
        if self._group not in parent.groups:
            raise DefinitionError(
                f"Group {self._group} must be registered before initializing {self.key}"
            )
        for name, spec in self._params.items():
            self._check_param_type(parent.registry, name, spec)

        self._locked = True
        logger.debug(f"initialized: {self.key}")

    def _check_param_type(self, registry: TypeRegistry, name: str, spec: ParameterSpecModel) -> None:
        type_def = registry.get(spec.type)
        if type_def is None:
            raise DefinitionError(f"Unknown type '{spec.type}' for parameter '{name}' of {self.key}")
        if spec.params is None:
            if type_def.is_params_required:
                raise DefinitionError(
                    f"Type {type_def.name} requires params for parameter '{name}' of {self.key}"
                )
            return
        if type_def.params_checker is not None and not type_def.params_checker(spec.params):
            raise DefinitionError(
                f"Invalid params for type {type_def.name} on parameter '{name}' of {self.key}: "
                f"{format_restrictions(spec.params)}"
            )

    # Routing

    def path_test(self, method: str, path: str) -> bool:
        """Whether this route serves ``method`` + ``path``."""
        return self.method == method.lower() and self._matcher.match(path) is not None

    def match_path(self, path: str) -> dict[str, str] | None:
        """Extract path parameter values, or None if ``path`` does not match."""
        match = self._matcher.match(path)
        if match is None:
            return None
        return {key: value for key, value in match.groupdict().items() if value is not None}

    def info(self) -> APIInfoModel:
        return APIInfoModel(
            key=self.key,
            method=self.method,
            path=self.path,
            group=self._group,
            title=self._title,
            description=self._description,
            parameters=list(self._params.values()),
            required_one_of=[list(group) for group in self._required_groups],
            examples=list(self._examples),
            locked=self._locked,
        )

    def __repr__(self) -> str:
        return f"API({self.key!r}, locked={self._locked})"
