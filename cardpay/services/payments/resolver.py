"""Outcome resolution seam between submission and the authorizer."""

from cardpay.services.authorizer.client import AuthorizerClient
from cardpay.services.payments.schemas import PaymentRequest, PaymentStatus


class OutcomeResolver:
    """Maps a validated request to a payment status via the authorizer.

    Errors from the authorizer propagate unchanged.
    """

    def __init__(self, authorizer: AuthorizerClient) -> None:
        self.authorizer = authorizer

    async def resolve(self, request: PaymentRequest) -> PaymentStatus:
        return await self.authorizer.authorize(request)
