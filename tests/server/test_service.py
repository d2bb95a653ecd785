"""Tests for the application object and its two-phase lifecycle."""

import pytest

from apidef.sdk.validator import DefinitionError, ParameterSpecModel, ValidationError
from apidef.server.core.config import ServiceConfigModel
from apidef.server.service import APIService


def _digits(value, params=None):
    return isinstance(value, str) and value.isdigit()


class TestDefinitionPhase:
    def test_builtins_registered(self):
        service = APIService()
        assert "Integer" in service.registry
        assert not service.registry.closed

    def test_groups(self, service):
        service.group("Orders")

        assert service.groups == {"Users": "User management", "Orders": ""}
        with pytest.raises(DefinitionError, match="already registered: Users"):
            service.group("Users")
        with pytest.raises(DefinitionError, match="non-empty string"):
            service.group("")

    def test_route_helpers(self, service):
        for method in ("get", "post", "put", "delete", "patch"):
            api = getattr(service, method)("/items", group="Users")
            assert api.method == method
            assert api.group == "Users"

        assert list(service.apis) == [
            "Users_GET_/items",
            "Users_POST_/items",
            "Users_PUT_/items",
            "Users_DELETE_/items",
            "Users_PATCH_/items",
        ]

    def test_duplicate_route(self, service):
        service.get("/items", group="Users")
        with pytest.raises(DefinitionError, match="already defined: Users_GET_/items"):
            service.get("/items", group="Users")

    def test_define(self, service):
        api = service.define(
            {"method": "get", "path": "/users", "title": "List", "query": {"page": "Integer"}},
            group="Users",
        )
        assert service.apis["Users_GET_/users"] is api

    def test_custom_type_usable_in_routes(self, service):
        service.register_type("Digits", _digits, description="Digits only")
        api = service.get("/codes/:code", group="Users").params({"code": "Digits"})
        service.init()

        assert service.check_request(api, path={"code": "123"}).path == {"code": "123"}
        with pytest.raises(ValidationError, match="should be valid Digits"):
            service.check_request(api, path={"code": "12a"})


class TestInit:
    def test_init_locks_routes_and_closes_registry(self, service):
        api = service.get("/users", group="Users")
        service.init()

        assert service.initialized
        assert api.locked
        assert service.registry.closed

    def test_no_changes_after_init(self, service):
        service.init()

        with pytest.raises(DefinitionError, match="closed"):
            service.register_type("Digits", _digits)
        with pytest.raises(DefinitionError, match="already initialized"):
            service.group("Orders")
        with pytest.raises(DefinitionError, match="already initialized"):
            service.get("/late", group="Users")
        with pytest.raises(DefinitionError, match="already initialized"):
            service.init()

    def test_init_fails_on_unregistered_group(self, service):
        service.get("/orders", group="Orders")
        with pytest.raises(DefinitionError, match="Group Orders must be registered"):
            service.init()
        assert not service.initialized

    def test_init_fails_without_group(self, service):
        service.get("/orders")
        with pytest.raises(DefinitionError, match="Please select a group"):
            service.init()


class TestServingPhase:
    def test_find_first_in_declaration_order(self, service):
        by_id = service.get("/users/:id", group="Users")
        service.get("/users/me", group="Users")
        service.init()

        assert service.find("GET", "/users/me") is by_id
        assert service.find("POST", "/users/me") is None
        assert service.find("GET", "/unknown") is None

    def test_checkers(self, service):
        spec = ParameterSpecModel(type="Integer", required=True)
        schema = {"age": spec}

        assert service.param_checker()("age", "5", spec) == 5
        assert service.schema_checker()({"age": "5", "x": 1}, schema) == {"age": 5}
        with pytest.raises(ValidationError, match="^incorrect parameter 'age' should be valid Integer$"):
            service.check_schema({"age": "abc"}, schema)


class TestFromConfig:
    def test_from_config(self):
        config = ServiceConfigModel.model_validate(
            {
                "apidef": 1,
                "groups": {"Users": "User management"},
                "apis": [
                    {
                        "method": "GET",
                        "path": "/users/:id",
                        "title": "Get user",
                        "group": "Users",
                        "params": {"id": {"type": "Integer", "required": True}},
                        "query": {"fields": "StringArray"},
                        "requiredOneOf": [["id"]],
                    }
                ],
            }
        )
        service = APIService.from_config(config)
        service.init()

        api = service.find("get", "/users/42")
        assert api is not None
        assert api.title == "Get user"
        assert api.required_groups == (("id",),)

        checked = service.check_request(
            api, query={"fields": "name,email"}, path=api.match_path("/users/42")
        )
        assert checked.path == {"id": 42}
        assert checked.query == {"fields": ["name", "email"]}
