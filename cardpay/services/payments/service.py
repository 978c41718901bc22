"""Payment submission orchestration.

A submission moves through the state machine in one linear pass: validate,
resolve the outcome with the authorizer, store the record, return it. Failed
validation returns the reasons without calling the authorizer; a downstream
failure re-raises and stores nothing.
"""

from uuid import UUID

from cardpay.common import state_machine as sm
from cardpay.common.errors import DownstreamFailure
from cardpay.common.logging import logger, payment_id_ctx
from cardpay.common.metrics import (
    payment_failure_total,
    payment_outcomes_total,
    payment_validation_failures_total,
)
from cardpay.services.payments.resolver import OutcomeResolver
from cardpay.services.payments.schemas import (
    PaymentRecord,
    PaymentRequest,
    PaymentStatus,
    ValidationResult,
)
from cardpay.services.payments.store import PaymentStore
from cardpay.services.payments.validator import PaymentRequestValidator


STATUS_STATES: dict[PaymentStatus, str] = {
    PaymentStatus.AUTHORIZED: sm.AUTHORIZED,
    PaymentStatus.DECLINED: sm.DECLINED,
    PaymentStatus.REJECTED: sm.REJECTED,
}


class Submission:
    """Tracks one submission's position in the state machine."""

    def __init__(self) -> None:
        self.state = sm.RECEIVED
        self.history = [sm.RECEIVED]

    def advance(self, new_state: str) -> None:
        sm.validate_transition(self.state, new_state)
        self.state = new_state
        self.history.append(new_state)
        if new_state in sm.TERMINAL_STATES:
            logger.info("submission finished path=%s", " -> ".join(self.history))


class PaymentsService:
    """Owns the submit and lookup use cases."""

    def __init__(
        self,
        validator: PaymentRequestValidator,
        resolver: OutcomeResolver,
        store: PaymentStore,
        service_name: str = "payment-gateway",
    ) -> None:
        self.validator = validator
        self.resolver = resolver
        self.store = store
        self.service_name = service_name

    async def submit(self, request: PaymentRequest) -> PaymentRecord | ValidationResult:
        """Validate, authorize and store one payment.

        Returns the stored record, or the validation result when the request is
        rejected before reaching the authorizer. Raises `DownstreamFailure`
        when the authorizer cannot produce a status.
        """

        submission = Submission()
        result = self.validator.validate(request)
        if not result.is_valid:
            submission.advance(sm.REJECTED_AT_VALIDATION)
            payment_validation_failures_total.labels(service=self.service_name).inc()
            logger.info("payment rejected at validation reasons=%s", len(result.errors))
            return result
        submission.advance(sm.VALIDATED)

        try:
            status = await self.resolver.resolve(request)
        except DownstreamFailure as exc:
            submission.advance(sm.FAILED)
            payment_failure_total.labels(service=self.service_name).inc()
            logger.error("payment failed downstream status_code=%s error=%s", exc.status_code, exc)
            raise
        submission.advance(STATUS_STATES[status])

        record = PaymentRecord.from_request(request, status)
        payment_id_ctx.set(str(record.id))
        self.store.add(record)
        submission.advance(sm.STORED)
        payment_outcomes_total.labels(service=self.service_name, status=status.value).inc()
        logger.info("payment stored status=%s", status.value)

        submission.advance(sm.RETURNED)
        return record

    def get_payment(self, payment_id: UUID) -> PaymentRecord | None:
        """Look up a stored payment; `None` when the id is unknown."""

        payment_id_ctx.set(str(payment_id))
        record = self.store.get(payment_id)
        if record is None:
            logger.info("payment lookup miss")
        return record
