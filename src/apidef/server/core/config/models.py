from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from apidef.server.definitions.api.models import APIDefinitionModel

logger = logging.getLogger(__name__)


def _ensure_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


class InfoConfigModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = "API"
    description: str = ""
    version: str = "1.0.0"
    host: str = "http://127.0.0.1"
    base_path: str = ""


class LoggingConfigModel(BaseModel):
    """Application logging configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: bool = False
    path: str | None = None
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    max_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    backup_count: int = Field(default=5, ge=0)

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class TracingConfigModel(BaseModel):
    """Tracing configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: bool = False
    endpoint: str | None = None
    console_export: bool = False
    headers: dict[str, str] = Field(default_factory=dict)


class ServiceConfigModel(BaseModel):
    """Contents of ``apidef.yml``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    apidef: Literal[1] = 1
    info: InfoConfigModel = Field(default_factory=InfoConfigModel)
    groups: dict[str, str] = Field(default_factory=dict)
    logging: LoggingConfigModel = Field(default_factory=LoggingConfigModel)
    tracing: TracingConfigModel = Field(default_factory=TracingConfigModel)
    apis: list[APIDefinitionModel] = Field(default_factory=list)

    @field_validator("apis", mode="before")
    @classmethod
    def _normalize_apis(cls, value: Any) -> list[Any]:
        return _ensure_list(value)

    @field_validator("groups", mode="before")
    @classmethod
    def _normalize_groups(cls, value: Any) -> Any:
        # A bare list of group names is accepted as groups without description.
        if isinstance(value, list):
            return {name: "" for name in value}
        return value or {}
