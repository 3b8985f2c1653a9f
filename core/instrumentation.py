"""
OpenTelemetry instrumentation setup.

Signing and validation open spans through get_tracer(). Without a
configured TracerProvider the API hands out no-op tracers, so the
library stays silent unless the host application opts in.
"""

import logging
import os

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.trace import Status, StatusCode  # noqa: F401

logger = logging.getLogger(__name__)


def setup_opentelemetry(
    service_name: str = None, exporter: SpanExporter = None, set_global: bool = True
) -> TracerProvider:
    """
    Configure OpenTelemetry tracing.

    Args:
        service_name: Service name resource attribute
            (defaults to OTEL_SERVICE_NAME or "offline-licensing")
        exporter: Span exporter (defaults to a console exporter)
        set_global: Install the provider as the global tracer provider

    Returns:
        The installed TracerProvider
    """
    resource = Resource.create(
        {
            "service.name": service_name
            or os.environ.get("OTEL_SERVICE_NAME", "offline-licensing"),
            "service.version": os.environ.get("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": os.environ.get("LICENSING_ENVIRONMENT", "development"),
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(BatchSpanProcessor(exporter or ConsoleSpanExporter()))
    if set_global:
        trace.set_tracer_provider(trace_provider)

    logger.info("OpenTelemetry instrumentation configured")
    return trace_provider


def get_tracer(name: str):
    """
    Get a tracer instance for manual instrumentation.

    Args:
        name: Tracer name (usually module name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)
