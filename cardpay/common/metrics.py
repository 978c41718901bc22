"""Prometheus metric definitions for the payment gateway."""

from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response


payment_requests_total = Counter("payment_requests_total", "Total payment submissions", ["service"])
payment_outcomes_total = Counter(
    "payment_outcomes_total",
    "Stored payments by terminal status",
    ["service", "status"],
)
payment_validation_failures_total = Counter(
    "payment_validation_failures_total",
    "Submissions rejected by request validation",
    ["service"],
)
payment_failure_total = Counter("payment_failure_total", "Submissions failed downstream", ["service"])
payment_latency_seconds = Histogram("payment_latency_seconds", "Payment submission latency seconds", ["service"])
authorizer_requests_total = Counter(
    "authorizer_requests_total",
    "Authorizer calls by outcome",
    ["outcome"],
)
authorizer_latency_seconds = Histogram(
    "authorizer_latency_seconds",
    "Authorizer round-trip latency seconds",
)
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "route", "method", "status_code"],
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration seconds",
    ["service", "route", "method"],
)


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")
