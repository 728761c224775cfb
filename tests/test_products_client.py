import pytest
import requests

from app.storefront.client import ApiClientError, ProductsApiClient
from app.storefront.filter_state import PriceBounds


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def test_list_products_passes_params():
    session = FakeSession(FakeResponse({"products": [], "pagination": {"page": 1}}))
    client = ProductsApiClient("http://shop.test/", session=session)

    payload = client.list_products({"page": "2", "limit": "12"})

    assert payload["pagination"] == {"page": 1}
    assert session.calls == [("http://shop.test/products/", {"page": "2", "limit": "12"})]


def test_price_range_is_widened_to_whole_units():
    session = FakeSession(FakeResponse({"min": 79.5, "max": 500.2}))

    bounds = ProductsApiClient("http://shop.test", session=session).get_price_range()

    assert bounds == PriceBounds(79, 501)


@pytest.mark.parametrize(
    "response",
    [
        requests.ConnectionError("refused"),
        FakeResponse({"error": "Database error"}, status_code=500),
        FakeResponse(ValueError("no json")),
    ],
)
def test_transport_failures_become_client_errors(response):
    client = ProductsApiClient("http://shop.test", session=FakeSession(response))

    with pytest.raises(ApiClientError):
        client.list_products({})


def test_malformed_price_range():
    client = ProductsApiClient("http://shop.test", session=FakeSession(FakeResponse(["x"])))

    with pytest.raises(ApiClientError):
        client.get_price_range()
