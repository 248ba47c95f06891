"""
Telemetry infrastructure setup.

OpenTelemetry tracing for the cleaning pipeline. Spans are opened by the
domain and application modules through module tracers; this module only
installs the provider and exporter.
"""

import logging
import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

# Get logger for this module
logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "page-cleaner"
DEFAULT_OTLP_ENDPOINT = "http://localhost:4318"


def tracing_enabled() -> bool:
    return os.getenv("OTEL_TRACES_ENABLED", "true").lower() in ("true", "1", "yes")


def setup_opentelemetry() -> bool:
    """
    Initialize OpenTelemetry tracing.

    Configuration is controlled by environment variables:
    - OTEL_SERVICE_NAME: Service name (default: page-cleaner)
    - OTEL_EXPORTER_OTLP_ENDPOINT: OTLP endpoint (default: http://localhost:4318)
    - OTEL_TRACES_ENABLED: Enable/disable tracing (default: true)

    Returns:
        True if a tracer provider was installed
    """
    if not tracing_enabled():
        logger.info("OpenTelemetry tracing is disabled")
        return False

    service_name = os.getenv("OTEL_SERVICE_NAME", DEFAULT_SERVICE_NAME)
    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", DEFAULT_OTLP_ENDPOINT)

    provider = TracerProvider(resource=Resource(attributes={SERVICE_NAME: service_name}))

    try:
        exporter = OTLPSpanExporter(endpoint=f"{otlp_endpoint}/v1/traces")
        provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)

        # Correlate log records with the active span
        LoggingInstrumentor().instrument(set_logging_format=False)
    except Exception as e:
        logger.warning("Failed to initialize OpenTelemetry: %s", str(e))
        return False

    logger.info(
        "OpenTelemetry initialized: service=%s, endpoint=%s",
        service_name,
        otlp_endpoint,
    )
    return True


def get_tracer():  # type: ignore
    """Get configured OpenTelemetry tracer"""
    return trace.get_tracer(__name__)
