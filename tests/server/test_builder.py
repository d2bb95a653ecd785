"""Tests for the route schema builder."""

import pytest

from apidef.sdk.validator import DefinitionError, ParameterSpecModel, SchemaLockedError
from apidef.server.definitions.api import API, compile_path, get_schema_key


class TestConstruction:
    def test_key_and_defaults(self):
        api = API("get", "/users/:id")

        assert api.key == "GET_/users/:id"
        assert api.method == "get"
        assert api.path_keys == ["id"]
        assert api.group == ""
        assert api.title == ""
        assert not api.locked

    def test_group_prefixes_key(self):
        assert API("POST", "/users", "Users").key == "Users_POST_/users"

    @pytest.mark.parametrize(
        "method,path,message",
        [
            ("", "/a", "`method` must be a string"),
            ("fetch", "/a", "`method` must be one of"),
            ("get", "", "`path` must be a string"),
            ("get", "users", "must start with '/'"),
            ("get", "/a/:", "Invalid path parameter"),
            ("get", "/a/:id/:id", "Duplicate path parameter"),
            ("get", "/a/:id\n", "Invalid path parameter"),
        ],
    )
    def test_invalid_route(self, method, path, message):
        with pytest.raises(DefinitionError, match=message):
            API(method, path)


class TestParameters:
    def test_placements(self):
        api = API("post", "/users/:id")
        api.params({"id": "Integer"})
        api.query({"verbose": {"type": "Boolean", "description": "More output"}})
        api.body({"name": ParameterSpecModel(type="String", required=True)})

        assert list(api.parameters) == ["id", "verbose", "name"]
        assert list(api.parameters_for("path")) == ["id"]
        assert list(api.parameters_for("query")) == ["verbose"]
        assert api.parameters_for("body")["name"].required
        assert api.parameters["verbose"].place == "query"
        assert api.parameters["verbose"].name == "verbose"
        assert api.parameters["verbose"].description == "More output"

    @pytest.mark.parametrize(
        "name,message",
        [
            ("", "non-empty string"),
            ("has space", "whitespace"),
            ("$where", "must not start with '\\$'"),
        ],
    )
    def test_invalid_names(self, name, message):
        with pytest.raises(DefinitionError, match=message):
            API("get", "/a").set_param(name, "String", "query")

    def test_invalid_place(self):
        with pytest.raises(DefinitionError, match="place must be one of"):
            API("get", "/a").set_param("x", "String", "header")

    def test_duplicate_across_placements(self):
        api = API("get", "/a").query({"x": "String"})
        with pytest.raises(DefinitionError, match="Parameter x already exists in GET_/a"):
            api.body({"x": "Integer"})

    def test_invalid_declaration(self):
        with pytest.raises(DefinitionError, match="Invalid declaration for parameter 'x'"):
            API("get", "/a").query({"x": {"type": "String", "bogus": 1}})

    def test_required_one_of(self):
        api = API("get", "/a").required_one_of(["x", "y"]).required_one_of(("z",))
        assert api.required_groups == (("x", "y"), ("z",))

    @pytest.mark.parametrize("names", ["xy", [], [1]])
    def test_required_one_of_invalid(self, names):
        with pytest.raises(DefinitionError, match="required_one_of"):
            API("get", "/a").required_one_of(names)


class TestMetadata:
    def test_chaining(self):
        handler = lambda request: None  # noqa: E731
        hook = lambda request: None  # noqa: E731
        api = (
            API("get", "/a")
            .set_title("Title")
            .set_description("Desc")
            .set_group("Users")
            .set_response({"type": "object"})
            .add_example({"input": {"a": 1}, "output": {"b": 2}})
            .register(handler)
            .add_before(hook, hook)
            .add_middlewares(hook)
        )

        assert api.title == "Title"
        assert api.description == "Desc"
        assert api.group == "Users"
        assert api.response == {"type": "object"}
        assert api.examples[0].output == {"b": 2}
        assert api.handler is handler
        assert api.before_hooks == (hook,)
        assert api.middlewares == (hook,)

    def test_invalid_example(self):
        with pytest.raises(DefinitionError, match="needs `input` and `output`"):
            API("get", "/a").add_example({"input": {}})

    def test_handler_must_be_callable(self):
        with pytest.raises(DefinitionError, match="Handler must be callable"):
            API("get", "/a").register("nope")


class TestLock:
    def test_requires_group(self, service):
        api = API("get", "/a")
        with pytest.raises(DefinitionError, match="Please select a group for API GET_/a"):
            api.lock(service)

    def test_requires_registered_group(self, service):
        api = API("get", "/a").set_group("Orders")
        with pytest.raises(DefinitionError, match="Group Orders must be registered"):
            api.lock(service)

    def test_unknown_type(self, service):
        api = API("get", "/a", "Users").set_group("Users").query({"x": "Nope"})
        with pytest.raises(DefinitionError, match="Unknown type 'Nope' for parameter 'x'"):
            api.lock(service)

    def test_enum_requires_params(self, service):
        api = API("get", "/a").set_group("Users").query({"x": "ENUM"})
        with pytest.raises(DefinitionError, match="Type ENUM requires params"):
            api.lock(service)

    def test_params_checked(self, service):
        api = API("get", "/a").set_group("Users")
        api.query({"x": {"type": "Integer", "params": {"low": 1}}})
        with pytest.raises(DefinitionError, match="Invalid params for type Integer"):
            api.lock(service)

    def test_locked_route_rejects_every_mutation(self, service):
        api = API("get", "/a").set_group("Users")
        api.lock(service)
        assert api.locked

        mutations = [
            lambda: api.set_title("x"),
            lambda: api.set_description("x"),
            lambda: api.set_group("Users"),
            lambda: api.set_response({}),
            lambda: api.add_example({"input": {}, "output": {}}),
            lambda: api.register(print),
            lambda: api.add_before(print),
            lambda: api.add_middlewares(print),
            lambda: api.set_param("y", "String", "query"),
            lambda: api.query({"y": "String"}),
            lambda: api.required_one_of(["y"]),
            lambda: api.lock(service),
        ]
        for mutate in mutations:
            with pytest.raises(SchemaLockedError, match="^GET_/a is already initialized, cannot be changed$"):
                mutate()


class TestRouting:
    def test_path_test(self):
        api = API("get", "/users/:id")

        assert api.path_test("GET", "/users/42")
        assert api.path_test("get", "/USERS/42/")
        assert not api.path_test("post", "/users/42")
        assert not api.path_test("get", "/users")
        assert not api.path_test("get", "/users/42/posts")

    def test_line_breaks_do_not_match(self):
        api = API("get", "/index/:id")

        assert not api.path_test("GET", "/index/1\n")
        assert not api.path_test("GET", "/index/1\n/")
        assert api.match_path("/index/1\n") is None
        assert not API("get", "/files/*").path_test("get", "/files/a\n")

    def test_match_path(self):
        api = API("get", "/users/:id/posts/:post?")

        assert api.match_path("/users/7/posts") == {"id": "7"}
        assert api.match_path("/users/7/posts/3") == {"id": "7", "post": "3"}
        assert api.match_path("/other") is None

    def test_wildcard(self):
        pattern, keys = compile_path("/files/*")

        assert keys == []
        assert pattern.match("/files/a/b/c")
        assert pattern.match("/files")
        assert not pattern.match("/other")

    def test_schema_key(self):
        assert get_schema_key("delete", "/a") == "DELETE_/a"
        assert get_schema_key("delete", "/a", "G") == "G_DELETE_/a"


class TestDefine:
    def test_define_from_mapping(self, service):
        api = API.define(
            {
                "method": "post",
                "path": "/users",
                "title": "Create user",
                "description": "Creates a user",
                "body": {"name": {"type": "String", "required": True}},
                "query": {"dry": "Boolean"},
                "required_one_of": [["name"]],
                "examples": [{"input": {"name": "Ada"}, "output": {"id": 1}}],
            },
            group="Users",
        )

        assert api.key == "Users_POST_/users"
        assert api.group == "Users"
        assert api.title == "Create user"
        assert list(api.parameters) == ["name", "dry"]
        assert api.required_groups == (("name",),)
        api.lock(service)

    def test_info(self, service):
        api = API("get", "/users/:id", "Users").set_group("Users").params({"id": "Integer"})
        api.lock(service)
        info = api.info()

        assert info.key == "Users_GET_/users/:id"
        assert info.locked
        assert info.parameters[0].place == "path"
