"""Shared type aliases and sentinels for the apidef validator."""

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from .models import ParameterSpecModel

Placement = Literal["query", "body", "path"]

PLACEMENTS: tuple[Placement, ...] = ("query", "body", "path")


class _Sentinel:
    """Named marker value that is never equal to user input."""

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False


# Input did not contain the parameter at all (``None`` is a present value).
MISSING = _Sentinel("MISSING")

# Validation result for an absent optional parameter without default:
# the key is left out of the sanitized output.
OMITTED = _Sentinel("OMITTED")


class SchemaSource(Protocol):
    """A route schema the validator can check input against."""

    @property
    def key(self) -> str: ...

    @property
    def locked(self) -> bool: ...

    @property
    def parameters(self) -> Mapping[str, "ParameterSpecModel"]: ...

    @property
    def required_groups(self) -> Sequence[tuple[str, ...]]: ...

    def parameters_for(self, place: Placement) -> dict[str, "ParameterSpecModel"]: ...


__all__ = ["Placement", "PLACEMENTS", "MISSING", "OMITTED", "SchemaSource"]
