"""
OpenTelemetry tracing setup.

Views open spans through ``get_tracer``. Until ``setup_opentelemetry``
installs an SDK provider the API hands out no-op tracers, so tracing
code runs unchanged in tests and in deployments with OTEL disabled.
"""

import logging
import os

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode  # noqa: F401

logger = logging.getLogger(__name__)

_configured = False


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def _build_resource():
    from opentelemetry.sdk.resources import Resource

    return Resource.create(
        {
            "service.name": os.environ.get("OTEL_SERVICE_NAME", "sqlbots-dashboard"),
            "service.version": os.environ.get("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": os.environ.get("ENVIRONMENT", "development"),
        }
    )


def _build_exporter():
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

    return OTLPSpanExporter(
        endpoint=os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT", "http://tempo:4317"),
        insecure=_env_flag("OTEL_EXPORTER_OTLP_INSECURE", "true"),
    )


def setup_opentelemetry():
    """
    Install the SDK tracer provider and auto-instrumentation.

    Spans go to an OTLP collector in batches. Django requests,
    PostgreSQL queries and Redis calls are instrumented. Calling this
    more than once is a no-op.
    """
    global _configured
    if _configured:
        return

    from opentelemetry.instrumentation.django import DjangoInstrumentor
    from opentelemetry.instrumentation.psycopg2 import Psycopg2Instrumentor
    from opentelemetry.instrumentation.redis import RedisInstrumentor
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    provider = TracerProvider(resource=_build_resource())
    provider.add_span_processor(BatchSpanProcessor(_build_exporter()))
    trace.set_tracer_provider(provider)

    DjangoInstrumentor().instrument()
    Psycopg2Instrumentor().instrument()
    RedisInstrumentor().instrument()

    _configured = True
    logger.info("OpenTelemetry instrumentation configured")


def get_tracer(name: str):
    """Tracer for manual spans, usually named after the calling module."""
    return trace.get_tracer(name)
