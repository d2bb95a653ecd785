"""Turn declarative route definitions into ``API`` schemas."""

import logging
from collections.abc import Iterable
from typing import Any, Protocol

from pydantic import ValidationError

from .builder import API
from .models import APIDefinitionModel

logger = logging.getLogger(__name__)


class RouteOwner(Protocol):
    def define(self, options: dict[str, Any], group: str | None = None) -> API: ...


def extract_validation_error(error: ValidationError | Exception | str) -> str:
    """Extract a concise validation error message from a pydantic error."""
    if isinstance(error, ValidationError):
        issues = error.errors()
        if issues:
            first = issues[0]
            loc = ".".join(str(part) for part in first.get("loc", []))
            message = first.get("msg", str(error))
            return f"{loc}: {message}" if loc else message
        return str(error)

    error_msg = str(error) if isinstance(error, Exception) else error
    return error_msg.split("\n")[0]


def definition_options(definition: APIDefinitionModel) -> dict[str, Any]:
    """Options mapping accepted by ``API.define`` for one definition."""
    return {
        "method": definition.method,
        "path": definition.path,
        "title": definition.title,
        "description": definition.description,
        "response": definition.response,
        "query": definition.query,
        "body": definition.body,
        "params": definition.params,
        "required_one_of": definition.required_one_of,
        "examples": definition.examples,
    }


def define_apis(owner: RouteOwner, definitions: Iterable[APIDefinitionModel]) -> list[API]:
    """Define every route in ``definitions`` on ``owner``, in order."""
    apis = []
    for definition in definitions:
        api = owner.define(definition_options(definition), group=definition.group)
        logger.debug(f"Defined {api.key} from definition file")
        apis.append(api)
    return apis
