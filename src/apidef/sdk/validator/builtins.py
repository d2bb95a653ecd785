"""Builtin value types.

Every ``APIService`` starts with these types registered. Parsers here never
raise: input they cannot convert is returned unchanged and the checker
rejects it.
"""

import ipaddress
import json
import math
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from .registry import TypeRegistry

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
DOMAIN_RE = re.compile(
    r"^(?=.{1,253}$)(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,63}$"
)
URL_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://[^\s/?#]+[^\s]*$")
ALPHA_RE = re.compile(r"^[A-Za-z]+$")
ALPHANUMERIC_RE = re.compile(r"^[A-Za-z0-9]+$")
HEX_RE = re.compile(r"^[0-9A-Fa-f]+$")
MD5_RE = re.compile(r"^[0-9A-Fa-f]{32}$")
MONGO_ID_RE = re.compile(r"^[0-9A-Fa-f]{24}$")
UUID_RE = re.compile(
    r"^[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}$"
)

RANGE_KEYS = frozenset({"min", "max"})


# Parsers


def _numeric_text(value: str) -> str | None:
    # int() and float() also take "1_000" and non-ASCII digits
    text = value.strip()
    if not text.isascii() or "_" in text:
        return None
    return text


def parse_number(value: Any) -> Any:
    """Convert numeric strings to int or float."""
    if not isinstance(value, str):
        return value
    text = _numeric_text(value)
    if text is None:
        return value
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return value


def parse_integer(value: Any) -> Any:
    """Convert integer strings and integral floats to int."""
    if isinstance(value, str):
        text = _numeric_text(value)
        if text is None:
            return value
        try:
            return int(text)
        except ValueError:
            return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def parse_float(value: Any) -> Any:
    if isinstance(value, str):
        text = _numeric_text(value)
        if text is None:
            return value
        try:
            return float(text)
        except ValueError:
            return value
    if isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return value


def parse_boolean(value: Any) -> Any:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1"):
            return True
        if lowered in ("false", "0"):
            return False
    return value


def _split_list(value: Any) -> Any:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",")] if value.strip() else []
    return value


def parse_int_array(value: Any) -> Any:
    """Parse ``"1,2,3"`` (or a list of numeric strings) into a list of ints."""
    value = _split_list(value)
    if isinstance(value, list):
        return [parse_integer(item) for item in value]
    return value


def parse_string_array(value: Any) -> Any:
    return _split_list(value)


def parse_iso_datetime(text: str) -> date | datetime | None:
    """Parse an ISO 8601 date or date-time string, or return None."""
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


# Checkers


def is_number(value: Any) -> bool:
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def in_range(value: Any, params: Any) -> bool:
    """Check ``value`` against optional ``{"min": .., "max": ..}`` bounds."""
    if not params:
        return True
    low = params.get("min")
    high = params.get("max")
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def check_range_params(params: Any) -> bool:
    return (
        isinstance(params, Mapping)
        and set(params) <= RANGE_KEYS
        and all(is_number(v) for v in params.values())
    )


def check_number(value: Any, params: Any = None) -> bool:
    return is_number(value) and in_range(value, params)


def check_integer(value: Any, params: Any = None) -> bool:
    return is_integer(value) and in_range(value, params)


def check_float(value: Any, params: Any = None) -> bool:
    return isinstance(value, float) and math.isfinite(value) and in_range(value, params)


def check_string(value: Any, params: Any = None) -> bool:
    return isinstance(value, str) and in_range(len(value), params)


def check_enum(value: Any, params: Any = None) -> bool:
    """Strict membership: same type and same value (``1`` is not ``True`` or ``1.0``)."""
    if not params:
        return False
    return any(type(value) is type(member) and value == member for member in params)


def check_enum_params(params: Any) -> bool:
    return isinstance(params, list | tuple) and len(params) > 0


def check_json(value: Any, params: Any = None) -> bool:
    if not isinstance(value, str):
        return False
    try:
        json.loads(value)
    except ValueError:
        return False
    return True


def check_json_serializable(value: Any, params: Any = None) -> bool:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return False
    return True


def check_date(value: Any, params: Any = None) -> bool:
    if isinstance(value, date):
        return True
    return isinstance(value, str) and parse_iso_datetime(value) is not None


def format_date(value: Any) -> Any:
    if isinstance(value, str):
        return parse_iso_datetime(value)
    return value


def check_ip(value: Any, params: Any = None) -> bool:
    if not isinstance(value, str):
        return False
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def check_port(value: Any, params: Any = None) -> bool:
    return is_integer(value) and 0 <= value <= 65535


def pattern_checker(pattern: re.Pattern[str]) -> Any:
    """Build a checker accepting strings that fully match ``pattern``."""

    def checker(value: Any, params: Any = None) -> bool:
        return isinstance(value, str) and pattern.fullmatch(value) is not None

    return checker


def _any(value: Any, params: Any = None) -> bool:
    return True


BUILTIN_TYPES: list[dict[str, Any]] = [
    {"name": "Any", "checker": _any, "description": "Any value"},
    {
        "name": "Boolean",
        "checker": lambda v, params=None: isinstance(v, bool),
        "parser": parse_boolean,
        "description": "Boolean; accepts true/false/1/0 strings",
    },
    {
        "name": "Date",
        "checker": check_date,
        "formatter": format_date,
        "description": "ISO 8601 date or date-time; formats to date/datetime",
    },
    {
        "name": "String",
        "checker": check_string,
        "params_checker": check_range_params,
        "description": "String; optional min/max length",
    },
    {
        "name": "TrimString",
        "checker": check_string,
        "formatter": lambda v: v.strip(),
        "params_checker": check_range_params,
        "description": "String; formatting strips surrounding whitespace",
    },
    {
        "name": "Number",
        "checker": check_number,
        "parser": parse_number,
        "params_checker": check_range_params,
        "description": "Finite number; accepts numeric strings",
    },
    {
        "name": "Integer",
        "checker": check_integer,
        "parser": parse_integer,
        "params_checker": check_range_params,
        "description": "Integer; accepts integer strings",
    },
    {
        "name": "Float",
        "checker": check_float,
        "parser": parse_float,
        "params_checker": check_range_params,
        "description": "Floating point number",
    },
    {"name": "Object", "checker": lambda v, params=None: isinstance(v, dict), "description": "Object"},
    {"name": "Array", "checker": lambda v, params=None: isinstance(v, list), "description": "Array"},
    {
        "name": "JSON",
        "checker": check_json,
        "formatter": json.loads,
        "description": "JSON encoded string; formats to the decoded value",
    },
    {
        "name": "JSONString",
        "checker": check_json_serializable,
        "formatter": json.dumps,
        "description": "JSON serializable value; formats to its JSON string",
    },
    {
        "name": "ENUM",
        "checker": check_enum,
        "params_checker": check_enum_params,
        "is_params_required": True,
        "description": "One of the declared values",
    },
    {
        "name": "IntArray",
        "checker": lambda v, params=None: isinstance(v, list) and all(is_integer(i) for i in v),
        "parser": parse_int_array,
        "description": "Array of integers; accepts comma separated strings",
    },
    {
        "name": "StringArray",
        "checker": lambda v, params=None: isinstance(v, list) and all(isinstance(i, str) for i in v),
        "parser": parse_string_array,
        "description": "Array of strings; accepts comma separated strings",
    },
    {
        "name": "NullableString",
        "checker": lambda v, params=None: v is None or isinstance(v, str),
        "description": "String or null",
    },
    {
        "name": "NullableInteger",
        "checker": lambda v, params=None: v is None or is_integer(v),
        "parser": parse_integer,
        "description": "Integer or null",
    },
    {"name": "Email", "checker": pattern_checker(EMAIL_RE), "description": "Email address"},
    {"name": "Domain", "checker": pattern_checker(DOMAIN_RE), "description": "Domain name"},
    {"name": "URL", "checker": pattern_checker(URL_RE), "description": "URL with scheme and host"},
    {"name": "UUID", "checker": pattern_checker(UUID_RE), "description": "UUID string"},
    {"name": "IP", "checker": check_ip, "description": "IPv4 or IPv6 address"},
    {"name": "Port", "checker": check_port, "parser": parse_integer, "description": "TCP/UDP port"},
    {"name": "Alpha", "checker": pattern_checker(ALPHA_RE), "description": "Letters only"},
    {
        "name": "AlphaNumeric",
        "checker": pattern_checker(ALPHANUMERIC_RE),
        "description": "Letters and digits only",
    },
    {"name": "Hex", "checker": pattern_checker(HEX_RE), "description": "Hexadecimal string"},
    {"name": "MD5", "checker": pattern_checker(MD5_RE), "description": "MD5 hex digest"},
    {
        "name": "MongoIdString",
        "checker": pattern_checker(MONGO_ID_RE),
        "description": "MongoDB ObjectId hex string",
    },
]


def register_builtin_types(registry: TypeRegistry) -> TypeRegistry:
    """Register every builtin type into ``registry``."""
    for definition in BUILTIN_TYPES:
        options = dict(definition)
        name = options.pop("name")
        checker = options.pop("checker")
        registry.register(name, checker, is_builtin=True, **options)
    return registry
