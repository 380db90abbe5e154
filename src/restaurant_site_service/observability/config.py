"""OpenTelemetry and logging configuration."""

import logging
import os
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.botocore import BotocoreInstrumentor
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from pythonjsonlogger import jsonlogger

logger = logging.getLogger(__name__)

SERVICE_NAME = "restaurant-site-svc"


def get_service_resource() -> Resource:
    """Create OpenTelemetry resource with service identification.

    Returns:
        Resource with service name and environment attributes
    """
    return Resource.create(
        {
            "service.name": os.getenv("OTEL_SERVICE_NAME", SERVICE_NAME),
            "deployment.environment": os.getenv("ENVIRONMENT", "development"),
        }
    )


def get_otlp_endpoint() -> str:
    """Base URL of the OTLP HTTP collector."""
    return os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")


def setup_tracing(resource: Resource) -> None:
    """Configure OpenTelemetry tracing with a batching OTLP exporter.

    Args:
        resource: Service resource for trace identification
    """
    otlp_endpoint = get_otlp_endpoint()
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=f"{otlp_endpoint}/v1/traces"))
    )
    trace.set_tracer_provider(provider)

    logger.info(f"OpenTelemetry tracing configured with endpoint: {otlp_endpoint}")


def setup_metrics(resource: Resource) -> None:
    """Configure OpenTelemetry metrics with a periodic OTLP exporter.

    Args:
        resource: Service resource for metric identification
    """
    otlp_endpoint = get_otlp_endpoint()
    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=f"{otlp_endpoint}/v1/metrics"),
        export_interval_millis=60000,
    )
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[reader]))

    logger.info(f"OpenTelemetry metrics configured with endpoint: {otlp_endpoint}")


def setup_observability(app: Any = None, enable_exporters: bool = True) -> None:
    """Initialize tracing, metrics, and auto-instrumentation.

    Exporters are skipped when ENVIRONMENT is "test".

    Args:
        app: Optional FastAPI application to instrument
        enable_exporters: Whether to enable OTLP exporters
    """
    if os.getenv("ENVIRONMENT", "development") == "test":
        enable_exporters = False

    resource = get_service_resource()

    if enable_exporters:
        setup_tracing(resource)
        setup_metrics(resource)
    else:
        trace.set_tracer_provider(TracerProvider(resource=resource))
        metrics.set_meter_provider(MeterProvider(resource=resource))

    # DynamoDB calls go through botocore
    BotocoreInstrumentor().instrument()

    if app is not None:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI application instrumented")

    logger.info("OpenTelemetry observability fully configured")


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            LOG_LEVEL in the environment takes precedence
    """
    level_str = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, level_str, logging.INFO)

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        timestamp=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logger.info(f"Structured JSON logging configured at {level_str} level")
