"""Exception types raised across the payment submission path."""


class CardPayError(Exception):
    """Base class for gateway service-level failures."""


class DownstreamFailure(CardPayError):
    """The authorizer answered with something the gateway cannot map to a status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DownstreamUnavailable(DownstreamFailure):
    """The authorizer could not be reached or did not answer in time."""


class DuplicatePaymentError(CardPayError):
    """A payment record with the same identifier is already stored."""
