"""The application object owning types, groups and routes.

Lifecycle:
    1. ``APIService()`` registers the builtin types.
    2. Definition phase: register custom types and groups, declare routes.
    3. ``init()`` locks every route and closes the type registry.
    4. Serving phase: ``find`` a route and ``check_request`` its input.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

from apidef.sdk.validator import (
    CheckedRequestModel,
    DefinitionError,
    ParameterSpecModel,
    SchemaValidator,
    TypeRegistry,
    register_builtin_types,
)
from apidef.server.core.config import ServiceConfigModel, load_service_config
from apidef.server.definitions.api import API, define_apis

logger = logging.getLogger(__name__)


class APIService:
    """Owns the type registry, the group table and every route schema.

    Example:
        >>> service = APIService()
        >>> service.group("Users", "User management")
        >>> api = service.get("/users/:id", group="Users").set_title("Get user")
        >>> api.params({"id": {"type": "Integer", "required": True}})
        >>> service.init()
        >>> route = service.find("GET", "/users/42")
        >>> service.check_request(route, path=route.match_path("/users/42")).path
        {'id': 42}
    """

    def __init__(self, config: ServiceConfigModel | None = None):
        self.config = config or ServiceConfigModel()
        self.registry = register_builtin_types(TypeRegistry())
        self.validator = SchemaValidator(self.registry)
        self._groups: dict[str, str] = {}
        self._apis: dict[str, API] = {}
        self._initialized = False

        for name, description in self.config.groups.items():
            self.group(name, description)

    @classmethod
    def from_config(cls, config: ServiceConfigModel) -> APIService:
        """Create a service with the groups and routes declared in ``config``."""
        service = cls(config)
        define_apis(service, config.apis)
        return service

    @classmethod
    def from_file(cls, config_path: Path | None = None) -> APIService:
        """Load ``apidef.yml`` and create a service from it (not yet initialized)."""
        return cls.from_config(load_service_config(config_path))

    def _check_initialized(self) -> None:
        if self._initialized:
            raise DefinitionError("Service is already initialized, cannot be changed")

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def groups(self) -> Mapping[str, str]:
        return dict(self._groups)

    @property
    def apis(self) -> Mapping[str, API]:
        return dict(self._apis)

    # Definition phase

    def group(self, name: str, description: str = "") -> APIService:
        """Register a route group."""
        self._check_initialized()
        if not isinstance(name, str) or not name:
            raise DefinitionError("Group name must be a non-empty string")
        if name in self._groups:
            raise DefinitionError(f"Group is already registered: {name}")
        self._groups[name] = description
        return self

    def register_type(self, name: str, checker: Callable[..., Any], **options: Any) -> APIService:
        """Register a custom value type; see ``TypeRegistry.register``."""
        self.registry.register(name, checker, **options)
        return self

    def _add(self, api: API) -> API:
        self._check_initialized()
        if api.key in self._apis:
            raise DefinitionError(f"API is already defined: {api.key}")
        self._apis[api.key] = api
        return api

    def route(self, method: str, path: str, group: str | None = None) -> API:
        """Declare a new route; configure it through the returned ``API``."""
        api = API(method, path, group)
        if group:
            api.set_group(group)
        return self._add(api)

    def get(self, path: str, group: str | None = None) -> API:
        return self.route("get", path, group)

    def post(self, path: str, group: str | None = None) -> API:
        return self.route("post", path, group)

    def put(self, path: str, group: str | None = None) -> API:
        return self.route("put", path, group)

    def delete(self, path: str, group: str | None = None) -> API:
        return self.route("delete", path, group)

    def patch(self, path: str, group: str | None = None) -> API:
        return self.route("patch", path, group)

    def define(self, options: Mapping[str, Any], group: str | None = None) -> API:
        """Declare a route from a mapping; see ``API.define``."""
        return self._add(API.define(options, group))

    def init(self) -> None:
        """End the definition phase: lock every route, close the registry."""
        self._check_initialized()
        for api in self._apis.values():
            api.lock(self)
        self.registry.close()
        self._initialized = True
        logger.info(f"Initialized {len(self._apis)} APIs in {len(self._groups)} groups")

    # Serving phase

    def find(self, method: str, path: str) -> API | None:
        """The first route, in declaration order, serving ``method`` + ``path``."""
        for api in self._apis.values():
            if api.path_test(method, path):
                return api
        return None

    def check_request(
        self,
        api: API,
        *,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
        path: Mapping[str, Any] | None = None,
    ) -> CheckedRequestModel:
        """Validate the input of one request; see ``SchemaValidator.check_request``."""
        return self.validator.check_request(api, query=query, body=body, path=path)

    def param_checker(self) -> Callable[[str, Any, ParameterSpecModel], Any]:
        """Callable validating a single value: ``(name, value, spec) -> value``."""
        return self.validator.check_param

    def schema_checker(self) -> Callable[..., dict[str, Any]]:
        """Callable validating an input object: ``(data, schema, required_one_of=None)``."""
        return self.validator.check_schema

    def check_schema(
        self,
        data: Mapping[str, Any] | None,
        schema: API | Mapping[str, ParameterSpecModel],
        required_one_of: Sequence[str] | Sequence[Sequence[str]] | None = None,
    ) -> dict[str, Any]:
        return self.validator.check_schema(data, schema, required_one_of)
