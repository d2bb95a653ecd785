"""
Global pytest configuration and fixtures.
"""

import pytest

from apidef.sdk.validator import (
    ParameterSpecModel,
    SchemaValidator,
    TypeRegistry,
    register_builtin_types,
)
from apidef.server.service import APIService


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Keep the developer's environment out of config lookup and logging."""
    monkeypatch.delenv("APIDEF_CONFIG", raising=False)
    monkeypatch.delenv("APIDEF_DEBUG", raising=False)


@pytest.fixture
def registry() -> TypeRegistry:
    return register_builtin_types(TypeRegistry())


@pytest.fixture
def validator(registry: TypeRegistry) -> SchemaValidator:
    return SchemaValidator(registry)


@pytest.fixture
def service() -> APIService:
    service = APIService()
    service.group("Users", "User management")
    return service


@pytest.fixture
def specs() -> dict[str, ParameterSpecModel]:
    """A small mixed schema used across the validator tests."""
    return {
        "stringP1": ParameterSpecModel(type="String", required=True),
        "stringP2": ParameterSpecModel(type="String", required=True, default="Hello"),
        "stringP3": ParameterSpecModel(type="TrimString"),
        "numP": ParameterSpecModel(type="Number", required=True),
        "intP": ParameterSpecModel(type="Integer"),
        "enumP": ParameterSpecModel(type="ENUM", required=True, params=["A", "B", 1]),
        "jsonP": ParameterSpecModel(type="JSON"),
    }


@pytest.fixture
def schema1(specs: dict[str, ParameterSpecModel]) -> dict[str, ParameterSpecModel]:
    return {name: specs[name] for name in ("stringP2", "stringP3", "numP", "intP")}
