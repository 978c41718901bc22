"""OpenTelemetry setup helpers for the FastAPI gateway."""

from contextlib import contextmanager

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

from cardpay.common.config import settings


tracer = trace.get_tracer("cardpay")


def setup_tracing(service_name: str) -> None:
    """Register a tracer provider with OTLP HTTP exporter when OTEL_ENABLED is set.

    Without it the global no-op provider stays in place and spans cost nothing.
    """

    if not settings.otel_enabled:
        return
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    exporter = OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)


def instrument_app(app: FastAPI) -> None:
    """Attach FastAPI auto-instrumentation for request spans."""

    if settings.otel_enabled:
        FastAPIInstrumentor.instrument_app(app)


@contextmanager
def authorizer_span(url: str):
    """Client span around one authorizer round trip."""

    with tracer.start_as_current_span(
        "authorizer.authorize",
        kind=trace.SpanKind.CLIENT,
        attributes={"http.request.method": "POST", "url.full": url},
    ) as span:
        yield span
