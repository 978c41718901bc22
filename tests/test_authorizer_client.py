"""HTTP authorizer client behavior against a stubbed transport."""

import json

import httpx
import pytest

from cardpay.common.errors import DownstreamFailure, DownstreamUnavailable
from cardpay.services.authorizer.client import HttpAuthorizerClient, build_payload
from cardpay.services.payments.schemas import PaymentRequest, PaymentStatus

pytestmark = pytest.mark.anyio

AUTHORIZER_URL = "http://authorizer.test/payments"


def client_for(handler) -> HttpAuthorizerClient:
    return HttpAuthorizerClient(url=AUTHORIZER_URL, timeout=1.0, transport=httpx.MockTransport(handler))


def test_payload_shape():
    request = PaymentRequest(
        card_number="2222405343248877",
        expiry_month=4,
        expiry_year=2027,
        currency="GBP",
        amount=100,
        cvv=123,
    )

    assert build_payload(request) == {
        "card_number": "2222405343248877",
        "expiry_date": "04/2027",
        "currency": "GBP",
        "amount": 100,
        "cvv": "123",
    }


async def test_posts_payload_once(valid_request):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"authorized": True})

    await client_for(handler).authorize(valid_request)

    assert len(seen) == 1
    assert seen[0].method == "POST"
    assert str(seen[0].url) == AUTHORIZER_URL
    assert json.loads(seen[0].content)["expiry_date"] == f"04/{valid_request.expiry_year}"


@pytest.mark.parametrize(
    "authorized,expected",
    [(True, PaymentStatus.AUTHORIZED), (False, PaymentStatus.DECLINED)],
)
async def test_success_body_maps_to_status(valid_request, authorized, expected):
    client = client_for(lambda request: httpx.Response(200, json={"authorized": authorized}))

    assert await client.authorize(valid_request) == expected


async def test_bad_request_is_a_rejection(valid_request):
    client = client_for(lambda request: httpx.Response(400))

    assert await client.authorize(valid_request) == PaymentStatus.REJECTED


@pytest.mark.parametrize("status_code", [401, 404, 500, 503])
async def test_unexpected_status_raises(valid_request, status_code):
    client = client_for(lambda request: httpx.Response(status_code))

    with pytest.raises(DownstreamFailure) as excinfo:
        await client.authorize(valid_request)

    assert excinfo.value.status_code == status_code
    assert not isinstance(excinfo.value, DownstreamUnavailable)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={}),
        httpx.Response(200, json={"authorized": "yes"}),
        httpx.Response(200, json=[True]),
    ],
)
async def test_malformed_body_raises(valid_request, response):
    client = client_for(lambda request: response)

    with pytest.raises(DownstreamFailure):
        await client.authorize(valid_request)


async def test_undecodable_body_is_downstream_failure(valid_request):
    client = client_for(
        lambda request: httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not-gzip")
    )

    with pytest.raises(DownstreamFailure) as excinfo:
        await client.authorize(valid_request)

    assert not isinstance(excinfo.value, DownstreamUnavailable)


async def test_redirect_loop_is_downstream_failure(valid_request):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.TooManyRedirects("redirect loop", request=request)

    with pytest.raises(DownstreamFailure):
        await client_for(handler).authorize(valid_request)


async def test_timeout_is_unavailable(valid_request):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(DownstreamUnavailable):
        await client_for(handler).authorize(valid_request)


async def test_connection_refused_is_unavailable(valid_request):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DownstreamUnavailable):
        await client_for(handler).authorize(valid_request)
