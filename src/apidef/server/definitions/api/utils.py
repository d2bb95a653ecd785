"""Shared utilities for route definitions."""

import logging
import re

from apidef.sdk.validator import DefinitionError

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("get", "post", "put", "delete", "patch")

PATH_PARAM_RE = re.compile(r":(\w+)(\?)?")


def get_schema_key(method: str, path: str, group: str | None = None) -> str:
    """Build the unique key of a route.

    >>> get_schema_key("get", "/users/:id")
    'GET_/users/:id'
    >>> get_schema_key("post", "/users", "Users")
    'Users_POST_/users'
    """
    prefix = f"{group}_" if group else ""
    return f"{prefix}{method.upper()}_{path}"


def compile_path(template: str) -> tuple[re.Pattern[str], list[str]]:
    """Compile a path template into a matcher.

    Supported segments:
        - literal text (``/users``)
        - named parameter (``/:id``), optional with a trailing ``?`` (``/:id?``)
        - wildcard (``/*``), matching the rest of the path

    Matching is case-insensitive and tolerates one trailing slash.

    Returns:
        The compiled pattern and the parameter names in declaration order

    Raises:
        DefinitionError: If a parameter segment is malformed or repeated
    """
    parts: list[str] = []
    keys: list[str] = []
    for segment in template.strip("/").split("/"):
        if not segment:
            continue
        if segment == "*":
            parts.append("(?:/.*)?")
            continue
        if segment.startswith(":"):
            match = PATH_PARAM_RE.fullmatch(segment)
            if not match:
                raise DefinitionError(f"Invalid path parameter '{segment}' in {template}")
            name, optional = match.group(1), match.group(2)
            if name in keys:
                raise DefinitionError(f"Duplicate path parameter '{name}' in {template}")
            keys.append(name)
            group = rf"/(?P<{name}>[^/\r\n]+?)"
            parts.append(f"(?:{group})?" if optional else group)
            continue
        parts.append("/" + re.escape(segment))

    pattern = re.compile("^" + "".join(parts) + r"/?\Z", re.IGNORECASE)
    return pattern, keys
