"""Registry of named value types.

Types are registered once while the application is being defined (builtins
first, then custom types) and are read-only afterwards. ``close()`` ends the
registration phase; later ``register`` calls fail.
"""

import logging
import re
from collections.abc import Callable, Iterator
from typing import Any

from apidef.sdk.telemetry import traced_operation

from .converters import DefinitionError
from .models import TypeDefinitionModel, TypeInfoModel

logger = logging.getLogger(__name__)

TYPE_NAME_RE = re.compile(r"^[A-Z]")


class TypeRegistry:
    """Catalog of value types available to parameter declarations.

    Example:
        >>> registry = TypeRegistry()
        >>> registry.register(
        ...     "Phone",
        ...     checker=lambda v, params=None: isinstance(v, str) and v.isdigit(),
        ...     parser=lambda v: v.replace("-", "") if isinstance(v, str) else v,
        ...     description="Phone number, digits only",
        ... )
        >>> registry.get("Phone").description
        'Phone number, digits only'
    """

    def __init__(self) -> None:
        self._types: dict[str, TypeDefinitionModel] = {}
        self._closed = False

    def register(
        self,
        name: str,
        checker: Callable[..., Any],
        *,
        parser: Callable[..., Any] | None = None,
        formatter: Callable[..., Any] | None = None,
        params_checker: Callable[..., Any] | None = None,
        description: str = "",
        is_builtin: bool = False,
        is_params_required: bool = False,
        is_default_format: bool = False,
    ) -> "TypeRegistry":
        """Register a value type.

        Args:
            name: Type name, must start with an uppercase letter and be unused
            checker: ``checker(value, params) -> bool``
            parser: Optional ``parser(value) -> value``
            formatter: Optional ``formatter(value) -> value``
            params_checker: Optional ``params_checker(params) -> bool``
            description: Description used in documentation
            is_builtin: Whether this is one of the types shipped with apidef
            is_params_required: Whether parameters of this type must declare constraint args
            is_default_format: Whether the formatter runs unless a parameter opts out

        Returns:
            The registry, for chaining

        Raises:
            DefinitionError: If the registry is closed or the definition is invalid
        """
        if self._closed:
            raise DefinitionError(f"Type registry is closed, cannot register type: {name}")
        if not isinstance(name, str) or not TYPE_NAME_RE.match(name):
            raise DefinitionError(f"Type name must start with an uppercase letter: {name}")
        if name in self._types:
            raise DefinitionError(f"Type is already registered: {name}")
        if not isinstance(description, str):
            raise DefinitionError(f"Type description must be a string: {name}")
        if not callable(checker):
            raise DefinitionError(f"Type checker must be callable: {name}")
        for label, fn in (
            ("parser", parser),
            ("formatter", formatter),
            ("params_checker", params_checker),
        ):
            if fn is not None and not callable(fn):
                raise DefinitionError(f"Type {label} must be callable: {name}")

        definition = TypeDefinitionModel(
            name=name,
            checker=checker,
            parser=parser,
            formatter=formatter,
            params_checker=params_checker,
            description=description,
            is_builtin=is_builtin,
            is_params_required=is_params_required,
            is_default_format=is_default_format,
        )

        if is_builtin:
            self._types[name] = definition
            return self

        with traced_operation(
            "apidef.types.register",
            {
                "apidef.type.name": name,
                "apidef.type.parser": parser is not None,
                "apidef.type.formatter": formatter is not None,
                "apidef.type.params_checker": params_checker is not None,
            },
        ):
            self._types[name] = definition
        logger.debug(
            f"register type: name={name}, parser={parser is not None}, "
            f"formatter={formatter is not None}, params_checker={params_checker is not None}, "
            f"description={description!r}"
        )
        return self

    def get(self, name: str) -> TypeDefinitionModel | None:
        """Get a type definition by name, or None if it is not registered."""
        return self._types.get(name)

    def names(self) -> list[str]:
        """Registered type names in registration order."""
        return list(self._types)

    def close(self) -> None:
        """End the registration phase."""
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def describe(self) -> list[TypeInfoModel]:
        """Describe every registered type without exposing its callables."""
        return [
            TypeInfoModel(
                name=t.name,
                description=t.description,
                is_builtin=t.is_builtin,
                has_parser=t.parser is not None,
                has_formatter=t.formatter is not None,
                has_params_checker=t.params_checker is not None,
                is_params_required=t.is_params_required,
                is_default_format=t.is_default_format,
            )
            for t in self._types.values()
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[TypeDefinitionModel]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)
