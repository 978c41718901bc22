"""Business-rule validation for inbound payment requests.

Every field is checked on every call so the caller sees the complete list of
problems at once. Within a field, a missing value only reports that the field
is required. Validation never raises.
"""

import calendar
from datetime import MAXYEAR, datetime, timezone
from typing import Callable

from cardpay.common.currencies import is_iso_currency
from cardpay.services.payments.schemas import PaymentRequest, ValidationResult


CARD_NUMBER_MIN_LENGTH = 14
CARD_NUMBER_MAX_LENGTH = 19
CVV_LENGTHS = (3, 4)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def expiry_instant(month: int, year: int) -> datetime:
    """Last second of the expiry month in UTC."""

    last_day = calendar.monthrange(year, month)[1]
    return datetime(year, month, last_day, 23, 59, 59, tzinfo=timezone.utc)


class PaymentRequestValidator:
    """Checks a `PaymentRequest` against the gateway's acceptance rules."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self.clock = clock

    def validate(self, request: PaymentRequest) -> ValidationResult:
        now = self.clock()
        errors: list[str] = []
        errors += self._card_number(request.card_number)
        errors += self._expiry_month(request.expiry_month)
        errors += self._expiry_year(request.expiry_year, now)
        errors += self._expiry_date(request.expiry_month, request.expiry_year, now)
        errors += self._currency(request.currency)
        errors += self._amount(request.amount)
        errors += self._cvv(request.cvv)
        return ValidationResult(errors=errors)

    @staticmethod
    def _card_number(card_number: str | None) -> list[str]:
        if not card_number or not card_number.strip():
            return ["Card number is required."]
        errors = []
        if not CARD_NUMBER_MIN_LENGTH <= len(card_number) <= CARD_NUMBER_MAX_LENGTH:
            errors.append("Card number must be between 14 and 19 digits long.")
        if not (card_number.isascii() and card_number.isdigit()):
            errors.append("Card number must only contain digits.")
        return errors

    @staticmethod
    def _expiry_month(month: int | None) -> list[str]:
        if not month:
            return ["Expiry month is required."]
        if not 1 <= month <= 12:
            return ["Expiry month must be between 1 and 12."]
        return []

    @staticmethod
    def _expiry_year(year: int | None, now: datetime) -> list[str]:
        if not year:
            return ["Expiry year is required."]
        if year < now.year:
            return ["Expiry year must be this year or in the future."]
        return []

    @staticmethod
    def _expiry_date(month: int | None, year: int | None, now: datetime) -> list[str]:
        # Out-of-range parts are reported by the field rules alone.
        if month is None or not 1 <= month <= 12 or year is None or year < now.year:
            return []
        # Beyond the representable calendar: always in the future.
        if year > MAXYEAR:
            return []
        if expiry_instant(month, year) < now:
            return ["The expiry date must be in the future."]
        return []

    @staticmethod
    def _currency(currency: str | None) -> list[str]:
        if not currency or not currency.strip():
            return ["Currency is required."]
        errors = []
        if len(currency) != 3:
            errors.append("Currency code must be exactly 3 characters.")
        if not is_iso_currency(currency):
            errors.append("Currency must be a valid ISO code.")
        return errors

    @staticmethod
    def _amount(amount: int | None) -> list[str]:
        if not amount:
            return ["Amount is required."]
        if amount < 0:
            return ["Amount must be a positive integer."]
        return []

    @staticmethod
    def _cvv(cvv: str | None) -> list[str]:
        if not cvv or not cvv.strip():
            return ["CVV is required."]
        if not (cvv.isascii() and cvv.isdigit()) or len(cvv) not in CVV_LENGTHS:
            return ["CVV must be 3 or 4 digits long."]
        return []
