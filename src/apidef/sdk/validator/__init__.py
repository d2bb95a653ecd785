"""apidef SDK Validator - pluggable value types and parameter validation.

## Key Components

### Types
- `TypeRegistry`: catalog of named value types (parser / checker / formatter)
- `register_builtin_types`: the standard types (String, Integer, ENUM, JSON, ...)

### Validation
- `ParameterValidator`: validates one value against one `ParameterSpecModel`
- `SchemaValidator`: validates request input against a route's parameters
  and required-one-of groups

### Errors
- `ValidationError` and its subclasses `MissingParameterError`,
  `IncorrectParameterError`, `RequiredOneOfError`: per-request failures
- `DefinitionError`, `SchemaLockedError`: mistakes made while defining types
  and routes

## Quick Example

```python
from apidef.sdk.validator import (
    ParameterSpecModel,
    SchemaValidator,
    TypeRegistry,
    register_builtin_types,
)

registry = register_builtin_types(TypeRegistry())
validator = SchemaValidator(registry)

schema = {
    "age": ParameterSpecModel(type="Integer", required=True),
    "kind": ParameterSpecModel(type="ENUM", params=["a", "b"], default="a"),
}
validator.check_schema({"age": "42"}, schema)
# Returns: {"age": 42, "kind": "a"}
```
"""

from ._types import MISSING, OMITTED, PLACEMENTS, Placement, SchemaSource
from .builtins import register_builtin_types
from .converters import (
    DefinitionError,
    IncorrectParameterError,
    MissingParameterError,
    ParameterValidator,
    RequiredOneOfError,
    SchemaLockedError,
    ValidationError,
    format_restrictions,
)
from .core import SchemaValidator
from .models import (
    CheckedRequestModel,
    ParameterSpecModel,
    TypeDefinitionModel,
    TypeInfoModel,
)
from .registry import TypeRegistry

__all__ = [
    # Types
    "Placement",
    "PLACEMENTS",
    "MISSING",
    "OMITTED",
    "SchemaSource",
    "TypeDefinitionModel",
    "TypeInfoModel",
    "ParameterSpecModel",
    "CheckedRequestModel",
    # Registry
    "TypeRegistry",
    "register_builtin_types",
    # Validation
    "ParameterValidator",
    "SchemaValidator",
    "format_restrictions",
    # Errors
    "ValidationError",
    "MissingParameterError",
    "IncorrectParameterError",
    "RequiredOneOfError",
    "DefinitionError",
    "SchemaLockedError",
]
