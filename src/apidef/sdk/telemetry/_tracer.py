"""Tracing functionality for the apidef SDK.

This module provides the core tracing API, wrapping OpenTelemetry's
tracer functionality.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status as OTelStatus
from opentelemetry.trace import StatusCode as OTelStatusCode

from apidef.sdk.core import PACKAGE_NAME, PACKAGE_VERSION

from ._config import is_tracing_enabled
from ._types import Span, SpanKind, Status, StatusCode

logger = logging.getLogger(__name__)

__all__ = ["traced_operation", "NoOpSpan", "SpanWrapper"]

_STATUS_CODE_MAP = {
    StatusCode.UNSET: OTelStatusCode.UNSET,
    StatusCode.OK: OTelStatusCode.OK,
    StatusCode.ERROR: OTelStatusCode.ERROR,
}

_SPAN_KIND_MAP = {
    SpanKind.INTERNAL: trace.SpanKind.INTERNAL,
    SpanKind.SERVER: trace.SpanKind.SERVER,
}


class NoOpSpan:
    """No-op span for when tracing is disabled."""

    def set_attribute(self, key: str, value: Any) -> None:
        pass

    def set_status(self, status: Status) -> None:
        pass

    def record_exception(self, exception: Exception) -> None:
        pass

    def is_recording(self) -> bool:
        return False


class SpanWrapper:
    """Wraps an OpenTelemetry span to implement our Span protocol."""

    def __init__(self, otel_span: Any) -> None:
        self._span = otel_span

    def set_attribute(self, key: str, value: Any) -> None:
        """Set an attribute on the span.

        OpenTelemetry only accepts primitives and homogeneous lists of
        primitives; anything else is stored as its string form.
        """
        if not self.is_recording() or value is None:
            return
        if isinstance(value, str | int | float | bool):
            self._span.set_attribute(key, value)
        elif isinstance(value, list | tuple) and all(
            isinstance(v, str | int | float | bool) for v in value
        ):
            self._span.set_attribute(key, list(value))
        else:
            self._span.set_attribute(key, str(value))

    def set_status(self, status: Status) -> None:
        if self.is_recording():
            otel_code = _STATUS_CODE_MAP.get(status.status_code, OTelStatusCode.UNSET)
            self._span.set_status(OTelStatus(otel_code, status.description))

    def record_exception(self, exception: Exception) -> None:
        if self.is_recording():
            self._span.record_exception(exception)

    def is_recording(self) -> bool:
        return self._span is not None and bool(self._span.is_recording())


def _get_tracer() -> trace.Tracer:
    return trace.get_tracer(PACKAGE_NAME, PACKAGE_VERSION)


@contextmanager
def traced_operation(
    name: str,
    attributes: dict[str, Any] | None = None,
    kind: SpanKind = SpanKind.INTERNAL,
) -> Iterator[Span]:
    """Context manager for tracing operations.

    Args:
        name: Operation name (e.g., "apidef.request.check")
        attributes: Initial span attributes
        kind: Type of span

    Yields:
        A span; a ``NoOpSpan`` when tracing is disabled

    Example:
        ```python
        with traced_operation("apidef.types.register", {"apidef.type.name": "Phone"}) as span:
            span.set_attribute("apidef.type.parser", True)
        ```
    """
    if not is_tracing_enabled():
        yield NoOpSpan()
        return

    otel_kind = _SPAN_KIND_MAP.get(kind, trace.SpanKind.INTERNAL)
    with _get_tracer().start_as_current_span(name, kind=otel_kind) as otel_span:
        span = SpanWrapper(otel_span)
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, value)

        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise
