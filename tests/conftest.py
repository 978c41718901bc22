"""Shared fixtures for gateway tests."""

from datetime import datetime, timezone

import pytest

from cardpay.services.payments.resolver import OutcomeResolver
from cardpay.services.payments.schemas import PaymentRequest, PaymentStatus
from cardpay.services.payments.service import PaymentsService
from cardpay.services.payments.store import InMemoryPaymentStore
from cardpay.services.payments.validator import PaymentRequestValidator


FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class StubAuthorizer:
    """Deterministic stand-in for the HTTP authorizer."""

    def __init__(self, status: PaymentStatus | None = PaymentStatus.AUTHORIZED, error: Exception | None = None):
        self.status = status
        self.error = error
        self.calls: list[PaymentRequest] = []

    async def authorize(self, request: PaymentRequest) -> PaymentStatus:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return self.status


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def validator() -> PaymentRequestValidator:
    return PaymentRequestValidator(clock=lambda: FIXED_NOW)


@pytest.fixture
def valid_request() -> PaymentRequest:
    return PaymentRequest(
        card_number="2222405343248877",
        expiry_month=4,
        expiry_year=FIXED_NOW.year + 1,
        currency="GBP",
        amount=100,
        cvv="123",
    )


@pytest.fixture
def authorizer() -> StubAuthorizer:
    return StubAuthorizer()


@pytest.fixture
def store() -> InMemoryPaymentStore:
    return InMemoryPaymentStore()


@pytest.fixture
def payments_service(validator, authorizer, store) -> PaymentsService:
    return PaymentsService(validator, OutcomeResolver(authorizer), store)
