"""HTTP surface for payment submission and lookup."""

from time import perf_counter
from uuid import UUID, uuid4

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cardpay.common.config import settings
from cardpay.common.errors import DownstreamFailure, DownstreamUnavailable
from cardpay.common.logging import configure_logging, logger, trace_id_ctx
from cardpay.common.metrics import (
    http_request_duration_seconds,
    http_requests_total,
    metrics_response,
    payment_latency_seconds,
    payment_requests_total,
)
from cardpay.common.startup import log_startup_config
from cardpay.common.tracing import instrument_app, setup_tracing
from cardpay.services.authorizer.client import HttpAuthorizerClient
from cardpay.services.payments.resolver import OutcomeResolver
from cardpay.services.payments.schemas import (
    VALIDATION_HEADER,
    PaymentRecord,
    PaymentRequest,
    ValidationResult,
)
from cardpay.services.payments.service import PaymentsService
from cardpay.services.payments.store import InMemoryPaymentStore
from cardpay.services.payments.validator import PaymentRequestValidator

configure_logging()
setup_tracing(settings.service_name)
log_startup_config(
    settings,
    ["log_level", "authorizer_url", "authorizer_timeout_seconds", "otel_enabled"],
)
service = PaymentsService(
    PaymentRequestValidator(),
    OutcomeResolver(HttpAuthorizerClient()),
    InMemoryPaymentStore(),
    service_name=settings.service_name,
)

app = FastAPI(title="Card Payment Gateway")
instrument_app(app)


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    """Record request count and latency for every HTTP call."""

    start = perf_counter()
    route = request.url.path
    method = request.method
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        route_obj = request.scope.get("route")
        if route_obj is not None and getattr(route_obj, "path", None):
            route = route_obj.path
        return response
    finally:
        elapsed = max(0.0, perf_counter() - start)
        http_request_duration_seconds.labels(
            service=settings.service_name,
            route=route,
            method=method,
        ).observe(elapsed)
        http_requests_total.labels(
            service=settings.service_name,
            route=route,
            method=method,
            status_code=str(status_code),
        ).inc()


@app.exception_handler(RequestValidationError)
async def payment_body_error_handler(request: Request, exc: RequestValidationError):
    """Report unparseable submission bodies like any other validation failure."""

    if request.method != "POST":
        return await request_validation_exception_handler(request, exc)
    reasons = [f"{'.'.join(str(p) for p in err['loc'][1:]) or 'body'}: {err['msg']}" for err in exc.errors()]
    return JSONResponse(status_code=400, content={"detail": "\n".join([VALIDATION_HEADER, *reasons])})


@app.post("/api/payments", response_model=PaymentRecord)
async def submit_payment(req: PaymentRequest, x_correlation_id: str | None = Header(default=None)):
    """Validate, authorize and store a payment.

    Returns 400 with every failing rule, 502/503 when the authorizer fails.
    """

    trace_id_ctx.set(x_correlation_id or str(uuid4()))
    payment_requests_total.labels(service=settings.service_name).inc()
    with payment_latency_seconds.labels(service=settings.service_name).time():
        try:
            outcome = await service.submit(req)
        except DownstreamUnavailable as exc:
            raise HTTPException(status_code=503, detail=f"Authorizer error: {exc}") from exc
        except DownstreamFailure as exc:
            raise HTTPException(status_code=502, detail=f"Authorizer error: {exc}") from exc
    if isinstance(outcome, ValidationResult):
        raise HTTPException(status_code=400, detail=outcome.message)
    return outcome


@app.get("/api/payments/{payment_id}", response_model=PaymentRecord)
def get_payment(payment_id: UUID):
    """Fetch one stored payment."""

    payment = service.get_payment(payment_id)
    if payment is None:
        logger.info("payment not found")
        raise HTTPException(status_code=404, detail=f"Payment with ID '{payment_id}' was not found.")
    return payment


@app.get("/metrics")
def metrics():
    """Prometheus scrape endpoint."""

    return metrics_response()


@app.get("/health")
def health():
    """Container health probe endpoint."""

    return {"ok": True}
