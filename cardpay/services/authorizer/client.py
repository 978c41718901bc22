"""Client for the external card authorization simulator.

One POST per submission, no retries. A 400 from the authorizer is a business
rejection; every other unexpected answer is a downstream failure.
"""

import time
from typing import Protocol

import httpx

from cardpay.common.config import settings
from cardpay.common.errors import DownstreamFailure, DownstreamUnavailable
from cardpay.common.logging import logger
from cardpay.common.metrics import authorizer_latency_seconds, authorizer_requests_total
from cardpay.common.tracing import authorizer_span
from cardpay.services.payments.schemas import PaymentRequest, PaymentStatus


class AuthorizerClient(Protocol):
    """Capability that turns a validated request into a payment status."""

    async def authorize(self, request: PaymentRequest) -> PaymentStatus: ...


def build_payload(request: PaymentRequest) -> dict:
    """Authorizer wire shape for one request."""

    return {
        "card_number": request.card_number,
        "expiry_date": f"{request.expiry_month:02d}/{request.expiry_year}",
        "currency": request.currency,
        "amount": request.amount,
        "cvv": str(request.cvv),
    }


def parse_authorized(resp: httpx.Response) -> bool:
    """Read the boolean `authorized` flag from a success body."""

    try:
        body = resp.json()
    except ValueError as exc:
        raise DownstreamFailure("Authorizer returned a malformed body", resp.status_code) from exc
    authorized = body.get("authorized") if isinstance(body, dict) else None
    if not isinstance(authorized, bool):
        raise DownstreamFailure("Authorizer response is missing a boolean 'authorized'", resp.status_code)
    return authorized


class HttpAuthorizerClient:
    """Authorizer client backed by httpx."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url or settings.authorizer_url
        self.timeout = timeout if timeout is not None else settings.authorizer_timeout_seconds
        self.transport = transport

    async def authorize(self, request: PaymentRequest) -> PaymentStatus:
        started = time.perf_counter()
        try:
            with authorizer_span(self.url) as span:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    resp = await client.post(self.url, json=build_payload(request))
                span.set_attribute("http.response.status_code", resp.status_code)
        except httpx.TimeoutException as exc:
            authorizer_requests_total.labels(outcome="timeout").inc()
            logger.error("authorizer timed out url=%s", self.url)
            raise DownstreamUnavailable(f"Authorizer timed out: {exc}") from exc
        except httpx.TransportError as exc:
            authorizer_requests_total.labels(outcome="unreachable").inc()
            logger.error("authorizer unreachable url=%s error=%s", self.url, exc)
            raise DownstreamUnavailable(f"Authorizer unreachable: {exc}") from exc
        except httpx.DecodingError as exc:
            authorizer_requests_total.labels(outcome="malformed").inc()
            logger.error("authorizer body could not be decoded error=%s", exc)
            raise DownstreamFailure(f"Authorizer returned an undecodable body: {exc}") from exc
        except httpx.RequestError as exc:
            authorizer_requests_total.labels(outcome="error").inc()
            logger.error("authorizer request failed error=%s", exc)
            raise DownstreamFailure(f"Authorizer request failed: {exc}") from exc
        finally:
            authorizer_latency_seconds.observe(max(0.0, time.perf_counter() - started))

        if resp.status_code == httpx.codes.BAD_REQUEST:
            authorizer_requests_total.labels(outcome="rejected").inc()
            logger.info("authorizer rejected request")
            return PaymentStatus.REJECTED

        if not resp.is_success:
            authorizer_requests_total.labels(outcome="error").inc()
            logger.error("authorizer responded status_code=%s", resp.status_code)
            raise DownstreamFailure(
                f"Authorizer responded with status {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            authorized = parse_authorized(resp)
        except DownstreamFailure:
            authorizer_requests_total.labels(outcome="malformed").inc()
            logger.error("authorizer returned unparseable body status_code=%s", resp.status_code)
            raise
        status = PaymentStatus.AUTHORIZED if authorized else PaymentStatus.DECLINED
        authorizer_requests_total.labels(outcome=status.value.lower()).inc()
        logger.info("authorizer decision status=%s", status.value)
        return status
