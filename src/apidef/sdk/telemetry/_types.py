"""Type definitions for apidef telemetry."""

from enum import Enum
from typing import Any, Protocol


class StatusCode(Enum):
    """Span status codes.

    - UNSET: Status not explicitly set
    - OK: Operation completed successfully
    - ERROR: Operation failed with an error
    """

    UNSET = 0
    OK = 1
    ERROR = 2


class Status:
    """Span status: a status code plus an optional description."""

    def __init__(self, status_code: StatusCode, description: str | None = None):
        self.status_code = status_code
        self.description = description


class SpanKind(Enum):
    """Type of span."""

    INTERNAL = 0
    SERVER = 1


class Span(Protocol):
    """Minimal span interface yielded by ``traced_operation``."""

    def set_attribute(self, key: str, value: Any) -> None: ...

    def set_status(self, status: Status) -> None: ...

    def record_exception(self, exception: Exception) -> None: ...

    def is_recording(self) -> bool: ...


__all__ = ["StatusCode", "Status", "SpanKind", "Span"]
