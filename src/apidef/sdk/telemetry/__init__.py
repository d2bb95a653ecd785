"""apidef SDK Telemetry - OpenTelemetry wrapper for tracing.

Configure once at startup, then wrap interesting operations:

    ```python
    from apidef.sdk.telemetry import configure_tracing, traced_operation

    configure_tracing(enabled=True, console_export=True)

    with traced_operation("my.operation", {"key": "value"}) as span:
        span.set_attribute("result", "success")
    ```
"""

from ._config import configure_tracing, is_tracing_enabled, shutdown_tracing
from ._tracer import NoOpSpan, SpanWrapper, traced_operation
from ._types import Span, SpanKind

__all__ = [
    "configure_tracing",
    "shutdown_tracing",
    "is_tracing_enabled",
    "traced_operation",
    "NoOpSpan",
    "SpanWrapper",
    "Span",
    "SpanKind",
]
