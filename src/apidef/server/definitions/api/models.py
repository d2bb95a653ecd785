from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from apidef.sdk.validator import ParameterSpecModel


class DefinitionModel(BaseModel):
    """Base model for route definitions enforcing immutability and strict fields."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class ExampleModel(DefinitionModel):
    input: dict[str, Any]
    output: dict[str, Any]


class APIDefinitionModel(DefinitionModel):
    """One route as declared in a definition file."""

    method: Literal["get", "post", "put", "delete", "patch"]
    path: str
    title: str
    description: str | None = None
    group: str | None = None
    query: dict[str, ParameterSpecModel | str] = Field(default_factory=dict)
    body: dict[str, ParameterSpecModel | str] = Field(default_factory=dict)
    params: dict[str, ParameterSpecModel | str] = Field(default_factory=dict)
    required_one_of: list[list[str]] = Field(default_factory=list, alias="requiredOneOf")
    examples: list[ExampleModel] = Field(default_factory=list)
    response: dict[str, Any] | None = None

    @field_validator("method", mode="before")
    @classmethod
    def _lower_method(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @field_validator("path")
    @classmethod
    def _validate_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("Path must start with '/'")
        return value


class APIInfoModel(DefinitionModel):
    """Read-only summary of a route, for listings and documentation consumers."""

    key: str
    method: str
    path: str
    group: str
    title: str
    description: str
    parameters: list[ParameterSpecModel]
    required_one_of: list[list[str]]
    examples: list[ExampleModel]
    locked: bool
