"""Payment record storage keyed by payment identifier."""

import threading
from typing import Protocol
from uuid import UUID

from cardpay.common.errors import DuplicatePaymentError
from cardpay.services.payments.schemas import PaymentRecord


class PaymentStore(Protocol):
    """Insert-once, read-many mapping from payment id to record."""

    def add(self, record: PaymentRecord) -> None: ...

    def get(self, payment_id: UUID) -> PaymentRecord | None: ...


class InMemoryPaymentStore:
    """Process-lifetime store; records are frozen so readers never see partial state."""

    def __init__(self) -> None:
        self._records: dict[UUID, PaymentRecord] = {}
        self._lock = threading.Lock()

    def add(self, record: PaymentRecord) -> None:
        with self._lock:
            if record.id in self._records:
                raise DuplicatePaymentError(f"Payment with ID '{record.id}' already exists.")
            self._records[record.id] = record

    def get(self, payment_id: UUID) -> PaymentRecord | None:
        with self._lock:
            return self._records.get(payment_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
