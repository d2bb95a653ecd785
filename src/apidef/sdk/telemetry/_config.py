"""Tracing configuration for the apidef SDK.

This module handles OpenTelemetry configuration and initialization,
keeping the OpenTelemetry APIs out of the rest of the code base.
"""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)

from apidef.sdk.core import PACKAGE_NAME, PACKAGE_VERSION

logger = logging.getLogger(__name__)

# Global flag for tracing state
_tracing_enabled = False


def configure_tracing(
    enabled: bool = False,
    endpoint: str | None = None,
    console_export: bool = False,
    service_name: str = PACKAGE_NAME,
    headers: dict[str, str] | None = None,
) -> None:
    """Configure tracing for apidef.

    Args:
        enabled: Whether spans should be recorded at all
        endpoint: OTLP/HTTP collector base URL (e.g. http://localhost:4318)
        console_export: Print spans to stdout instead of exporting them
        service_name: Value of the ``service.name`` resource attribute
        headers: Extra headers sent to the OTLP collector
    """
    global _tracing_enabled

    if not enabled:
        logger.debug("Tracing disabled")
        _tracing_enabled = False
        return

    resource = Resource.create(
        {"service.name": service_name, "service.version": PACKAGE_VERSION}
    )
    provider = TracerProvider(resource=resource)

    processor: SimpleSpanProcessor | BatchSpanProcessor
    if console_export:
        processor = SimpleSpanProcessor(ConsoleSpanExporter())
    elif endpoint:
        exporter = OTLPSpanExporter(endpoint=f"{endpoint}/v1/traces", headers=headers or {})
        processor = BatchSpanProcessor(exporter)
    else:
        logger.warning("Tracing enabled but no endpoint or console export configured")
        _tracing_enabled = False
        return

    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    _tracing_enabled = True

    logger.info(f"Tracing configured with {type(processor).__name__}")


def shutdown_tracing() -> None:
    """Shutdown tracing and flush any pending spans."""
    global _tracing_enabled

    provider = trace.get_tracer_provider()
    if hasattr(provider, "shutdown"):
        provider.shutdown()
    _tracing_enabled = False
    logger.debug("Tracing shutdown complete")


def is_tracing_enabled() -> bool:
    """Check if tracing is currently enabled."""
    return _tracing_enabled
