"""API request/response schemas for the payments endpoints."""

from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


VALIDATION_HEADER = "Please provide all required fields for the payment request."


class PaymentStatus(str, Enum):
    """Terminal outcome of a submitted payment."""

    AUTHORIZED = "Authorized"
    DECLINED = "Declined"
    REJECTED = "Rejected"


class PaymentRequest(BaseModel):
    """Payment payload accepted from clients.

    Fields are optional on purpose: missing data is reported by the validator
    alongside every other failing rule instead of failing request parsing.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    card_number: str | None = None
    expiry_month: int | None = None
    expiry_year: int | None = None
    currency: str | None = None
    amount: int | None = None
    cvv: str | None = None


class PaymentRecord(BaseModel):
    """Stored outcome of one payment submission."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    status: PaymentStatus
    card_number_last_four: int
    expiry_month: int
    expiry_year: int
    currency: str
    amount: int

    @classmethod
    def from_request(cls, request: PaymentRequest, status: PaymentStatus) -> "PaymentRecord":
        """Build a record from a validated request, keeping only the last four card digits."""

        return cls(
            status=status,
            card_number_last_four=int(request.card_number[-4:]),
            expiry_month=request.expiry_month,
            expiry_year=request.expiry_year,
            currency=request.currency,
            amount=request.amount,
        )


class ValidationResult(BaseModel):
    """Pass/fail plus ordered human-readable reasons."""

    errors: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        return "\n".join([VALIDATION_HEADER, *self.errors])
